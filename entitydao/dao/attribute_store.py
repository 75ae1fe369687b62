##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Current and original values of an entity, and the dirty set between them.
"""

from typing import Any, Container, Dict, Mapping


_MISSING = object()


def values_differ(original: Any, current: Any) -> bool:
    """
    Compare two raw column values. Values differ unless they are equal and of
    the same type, so `1`, `"1"` and `True` are three different values.

    Args:
        original: The snapshot value.
        current: The current value.

    Returns:
        True if the value has changed.
    """
    if (original is None) != (current is None):
        return True
    return type(original) is not type(current) or original != current


class AttributeStore:
    """
    Holds the raw column values of one entity.

    Attributes:
        data (Dict[str, Any]): The current values, keyed by column.
        original_data (Dict[str, Any]): The values as last loaded or written.

    Methods:
        get: Return the current value of a column.
        set: Set the current value of a column.
        contains: Whether a column has a current value.
        is_present: Whether a column has a non-None current value.
        reset: Replace both current and original values.
        snapshot: Make the current values the original values.
        changes: Return the changed columns and their current values.
    """

    def __init__(self, data: Mapping[str, Any] = None):
        self.data: Dict[str, Any] = dict(data or {})
        self.original_data: Dict[str, Any] = dict(self.data)

    def get(self, column: str, default: Any = None) -> Any:
        """Returns the current value of `column`, or `default` if it has none."""
        return self.data.get(column, default)

    def set(self, column: str, value: Any):
        """Sets the current value of `column`."""
        self.data[column] = value

    def contains(self, column: str) -> bool:
        """Returns True if `column` has a current value, even a None one."""
        return column in self.data

    def is_present(self, column: str) -> bool:
        """Returns True if `column` has a current value other than None."""
        return self.data.get(column) is not None

    def reset(self, data: Mapping[str, Any]):
        """
        Replace the current and the original values with copies of `data`.

        Args:
            data: Raw values keyed by column.
        """
        self.data = dict(data)
        self.original_data = dict(data)

    def snapshot(self):
        """Make a copy of the current values the new original values."""
        self.original_data = dict(self.data)

    def changes(self, exclude: Container[str] = ()) -> Dict[str, Any]:
        """
        Collect the columns that changed since the last snapshot. A column has
        changed if it was missing from the snapshot, if its value differs, or
        if exactly one of the two values is None.

        Args:
            exclude: Columns that are never reported (e.g. primary key columns).

        Returns:
            The current values of the changed columns.
        """
        fields = {}
        for column, value in self.data.items():
            if column in exclude:
                continue
            original = self.original_data.get(column, _MISSING)
            if original is _MISSING or values_differ(original, value):
                fields[column] = value
        return fields
