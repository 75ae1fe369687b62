##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Uniform handling of scalar and compound primary keys.

A primary key is either one column name (scalar) or an ordered list of column
names (compound). A list holding a single column behaves like a scalar key for
lookups.
"""

from typing import Any, Dict, List, Mapping, MutableMapping, Sequence, Tuple, Union

from entitydao.exceptions import (
    IllegalStateError,
    InvalidArgumentError,
    PrimaryKeyAlreadySetError,
    PrimaryKeyIncompleteError,
    PrimaryKeyNotSetError,
)


KeySpec = Union[str, Sequence[str]]


class PrimaryKeyPolicy:
    """
    Reads, assigns and validates the primary key of an entity's raw data.

    Attributes:
        columns (Tuple[str, ...]): The key columns, in order.
        is_compound (bool): True if the key was declared as a list of columns.

    Methods:
        name: The scalar key column.
        lookup_column: The column used for scalar lookups, or None for true compound keys.
        get_id: Return the key value(s).
        set_id: Assign the key value(s).
        has_id: Whether the key value(s) are all present.
        where_clause: Return `(column, value)` pairs identifying the row.
    """

    def __init__(self, key: KeySpec):
        """
        Validate and store the key shape.

        Args:
            key: A column name or a non-empty list/tuple of column names.

        Raises:
            InvalidArgumentError: If `key` is neither a non-empty string nor a
                non-empty list/tuple of non-empty strings.
        """
        if isinstance(key, str):
            if not key:
                raise InvalidArgumentError("Primary key must not be empty")
            self.columns: Tuple[str, ...] = (key,)
            self.is_compound: bool = False
        elif isinstance(key, (list, tuple)):
            if not key or not all(isinstance(column, str) and column for column in key):
                raise InvalidArgumentError("Primary key must be a string or a list of strings")
            self.columns = tuple(key)
            self.is_compound = True
        else:
            raise InvalidArgumentError("Primary key must be a string or a list of strings")

    def __repr__(self) -> str:
        return f"PrimaryKeyPolicy({list(self.columns) if self.is_compound else self.columns[0]!r})"

    @property
    def name(self) -> str:
        """
        The scalar key column.

        Raises:
            IllegalStateError: If the key is compound.
        """
        if self.is_compound:
            raise IllegalStateError("Primary key is compound; it has no single column name")
        return self.columns[0]

    @property
    def lookup_column(self) -> Union[str, None]:
        """The column matched by scalar lookups, or None if the key spans several columns."""
        if len(self.columns) == 1:
            return self.columns[0]
        return None

    def is_key_column(self, column: str) -> bool:
        """Returns True if `column` is part of the key."""
        return column in self.columns

    def get_id(self, data: Mapping[str, Any]) -> Union[Any, Dict[str, Any]]:
        """
        Return the key value of a row.

        Args:
            data: The raw values of the row.

        Returns:
            The value for a scalar key, or a dictionary of column -> value in key order.

        Raises:
            PrimaryKeyNotSetError: If a scalar key has no value.
            PrimaryKeyIncompleteError: If any column of a compound key has no value.
        """
        if not self.is_compound:
            value = data.get(self.columns[0])
            if value is None:
                raise PrimaryKeyNotSetError("No primary key set for this entity")
            return value

        result = {}
        for column in self.columns:
            if data.get(column) is None:
                raise PrimaryKeyIncompleteError(f"Primary key not complete: {column}")
            result[column] = data[column]
        return result

    def set_id(self, data: MutableMapping[str, Any], value: Any):
        """
        Assign the key value of a row. A scalar key can be assigned only once;
        a compound key is assigned all at once from a mapping.

        Args:
            data: The raw values of the row; modified in place.
            value: The key value, or a mapping of column -> value for compound keys.

        Raises:
            PrimaryKeyAlreadySetError: If a scalar key already has a value.
            InvalidArgumentError: If a compound key is given something other than a mapping.
            PrimaryKeyIncompleteError: If the mapping lacks a key column.
        """
        if not self.is_compound:
            column = self.columns[0]
            if data.get(column) is not None:
                raise PrimaryKeyAlreadySetError("Can not set primary key again")
            data[column] = value
            return

        if not isinstance(value, Mapping):
            raise InvalidArgumentError("A compound primary key must be set from a mapping of column -> value")
        for column in self.columns:
            if value.get(column) is None:
                raise PrimaryKeyIncompleteError(f"Primary key not complete: {column}")
        for column in self.columns:
            data[column] = value[column]

    def has_id(self, data: Mapping[str, Any]) -> bool:
        """Returns True if `get_id` would succeed."""
        try:
            self.get_id(data)
        except (PrimaryKeyNotSetError, PrimaryKeyIncompleteError):
            return False
        return True

    def where_clause(self, data: Mapping[str, Any]) -> List[Tuple[str, Any]]:
        """
        Return the `(column, value)` pairs identifying a row, in key order.

        Args:
            data: The raw values of the row.

        Raises:
            PrimaryKeyNotSetError: If a scalar key has no value.
            PrimaryKeyIncompleteError: If any column of a compound key has no value.
        """
        key_id = self.get_id(data)
        if not self.is_compound:
            return [(self.columns[0], key_id)]
        return list(key_id.items())
