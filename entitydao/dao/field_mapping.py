##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Translation between column names and entity property names.

A `FieldMapping` owns the `field_map` (column -> property), its inverse
`value_map` (property -> column), the `format_map` (column -> type tag) and
the set of properties hidden from `get_values()`. Values are encoded with the
format codec on their way into an entity and decoded on their way out.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from entitydao.exceptions import InvalidArgumentError
from entitydao.formats import DEFAULT_CODEC, FormatCodec


LOG = logging.getLogger(__name__)


class FieldMapping:
    """
    Column/property name translation and value format conversion for one entity type.

    Attributes:
        field_map (Dict[str, str]): Maps column names to property names.
        value_map (Dict[str, str]): Maps property names to column names; always
            the exact inverse of `field_map`.
        format_map (Dict[str, str]): Maps column names to format type tags.
        hidden_fields (frozenset): Property names excluded from `project`.
        codec (FormatCodec): The codec used to encode and decode values.

    Methods:
        to_column: Resolve a property name to its column.
        to_property: Resolve a column to its property name.
        property_names: Return every mapped property name.
        encode: Encode a value for storage in a column.
        decode: Decode the raw value of a column.
        project: Turn a row of raw column values into decoded, visible property values.
    """

    def __init__(
        self,
        field_map: Mapping[str, str] = None,
        value_map: Mapping[str, str] = None,
        format_map: Mapping[str, str] = None,
        hidden_fields: Iterable[str] = (),
        codec: Optional[FormatCodec] = None,
    ):
        """
        Build the mapping. If `value_map` is empty it is derived from `field_map`.

        Args:
            field_map: Maps column names to property names.
            value_map: Maps property names to column names.
            format_map: Maps column names to format type tags.
            hidden_fields: Property names excluded from `project`.
            codec: The codec used to encode and decode values.

        Raises:
            InvalidArgumentError: If `value_map` is given and is not the inverse of `field_map`,
                or if two columns map to the same property.
        """
        self.field_map: Dict[str, str] = dict(field_map or {})
        inverse = {prop: column for column, prop in self.field_map.items()}
        if len(inverse) != len(self.field_map):
            raise InvalidArgumentError(f"field_map maps several columns to the same property: {self.field_map}")

        if value_map and dict(value_map) != inverse:
            raise InvalidArgumentError("value_map must be the inverse of field_map")

        self.value_map: Dict[str, str] = inverse
        self.format_map: Dict[str, str] = dict(format_map or {})
        self.hidden_fields = frozenset(hidden_fields or ())
        self.codec: FormatCodec = codec if codec is not None else DEFAULT_CODEC

    def to_column(self, name: str) -> str:
        """
        Resolve a property name to its column. Unmapped names are columns themselves.

        Args:
            name: A property or column name.

        Returns:
            The column name.
        """
        return self.value_map.get(name, name)

    def to_property(self, column: str) -> str:
        """
        Resolve a column to its property name. Unmapped columns keep their name.

        Args:
            column: A column name.

        Returns:
            The property name.
        """
        return self.field_map.get(column, column)

    def property_names(self) -> Iterable[str]:
        """Returns the property names declared in `field_map`."""
        return self.field_map.values()

    def encode(self, column: str, value: Any) -> Any:
        """
        Encode an application value for storage in `column`. Columns without
        a format are stored as given.

        Args:
            column: The column name.
            value: The application value.

        Returns:
            The raw value.
        """
        type_tag = self.format_map.get(column)
        if type_tag is None:
            return value
        return self.codec.encode(type_tag, value)

    def decode(self, column: str, raw_value: Any) -> Any:
        """
        Decode the raw value of `column`. Columns without a format are returned as stored.

        Args:
            column: The column name.
            raw_value: The raw value.

        Returns:
            The application value.
        """
        type_tag = self.format_map.get(column)
        if type_tag is None:
            return raw_value
        return self.codec.decode(type_tag, raw_value)

    def project(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Turn raw column values into decoded values keyed by property name.
        Hidden properties are left out.

        Args:
            data: Raw values keyed by column name.

        Returns:
            Decoded values keyed by property name.
        """
        result = {}
        for column, raw_value in data.items():
            prop = self.to_property(column)
            if prop in self.hidden_fields:
                continue
            result[prop] = self.decode(column, raw_value)
        return result
