##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Value formats used to convert between application values and raw SQL values.

Entities declare a `format_map` (column -> type tag). The `FormatCodec` applies
`encode` when a value is written to an entity and `decode` when it is read back.
`None` is never converted in either direction.
"""

import json
import logging
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Tuple

from entitydao.exceptions import InvalidArgumentError


LOG = logging.getLogger(__name__)


class Format:  # pylint: disable=R0903
    """
    Type tags that can be used in an entity's `format_map`.
    """

    NONE = "none"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    JSON = "json"
    CSV = "csv"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"

    DATE_LAYOUT = "%Y-%m-%d"
    TIME_LAYOUT = "%H:%M:%S"
    DATETIME_LAYOUT = "%Y-%m-%d %H:%M:%S"


def _decode_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.strptime(str(value), Format.DATETIME_LAYOUT)


def _encode_datetime(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.strftime(Format.DATETIME_LAYOUT)
    return str(value)


def _decode_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], Format.DATE_LAYOUT).date()


def _encode_date(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.strftime(Format.DATE_LAYOUT)
    return str(value)


def _decode_time(value: Any) -> time:
    if isinstance(value, time):
        return value
    return datetime.strptime(str(value), Format.TIME_LAYOUT).time()


def _encode_time(value: Any) -> str:
    if isinstance(value, (datetime, time)):
        return value.strftime(Format.TIME_LAYOUT)
    return str(value)


def _decode_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromtimestamp(int(value))


def _encode_timestamp(value: Any) -> int:
    if isinstance(value, datetime):
        return int(value.timestamp())
    return int(value)


def _decode_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no", "off")
    return bool(value)


def _decode_json(value: Any) -> Any:
    if isinstance(value, (bytes, str)):
        return json.loads(value)
    return value


def _decode_csv(value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    if value == "":
        return []
    return [item.strip() for item in str(value).split(",")]


def _encode_csv(value: Any) -> str:
    if isinstance(value, (list, tuple, set)):
        return ",".join(str(item) for item in value)
    return str(value)


def _identity(value: Any) -> Any:
    return value


class FormatCodec:
    """
    Converts values between their application representation and their
    raw SQL representation, based on a type tag.

    Additional tags can be registered with `register`.

    Attributes:
        _converters (Dict[str, Tuple[Callable, Callable]]): Maps a type tag to a
            `(decode, encode)` pair of functions.

    Methods:
        register: Register (or replace) the converters of a type tag.
        decode: Convert a raw SQL value into its application representation.
        encode: Convert an application value into its raw SQL representation.
    """

    def __init__(self):
        self._converters: Dict[str, Tuple[Callable, Callable]] = {
            Format.NONE: (_identity, _identity),
            Format.INT: (int, int),
            Format.FLOAT: (float, float),
            Format.BOOL: (_decode_bool, lambda value: 1 if _decode_bool(value) else 0),
            Format.STRING: (str, str),
            Format.JSON: (_decode_json, json.dumps),
            Format.CSV: (_decode_csv, _encode_csv),
            Format.DATE: (_decode_date, _encode_date),
            Format.TIME: (_decode_time, _encode_time),
            Format.DATETIME: (_decode_datetime, _encode_datetime),
            Format.TIMESTAMP: (_decode_timestamp, _encode_timestamp),
        }

    def register(self, type_tag: str, decode: Callable[[Any], Any], encode: Callable[[Any], Any]):
        """
        Register the converters for a type tag.

        Args:
            type_tag: The tag used in `format_map`.
            decode: Function converting a raw SQL value to an application value.
            encode: Function converting an application value to a raw SQL value.
        """
        self._converters[type_tag] = (decode, encode)
        LOG.debug(f"Registered format '{type_tag}'")

    def _get_converters(self, type_tag: str) -> Tuple[Callable, Callable]:
        try:
            return self._converters[type_tag]
        except KeyError as exc:
            raise InvalidArgumentError(f"Unknown format type: {type_tag}") from exc

    def decode(self, type_tag: str, raw_value: Any) -> Any:
        """
        Convert a raw SQL value into its application representation.

        Args:
            type_tag: A format type tag (see `Format`).
            raw_value: The value as stored in the database.

        Returns:
            The decoded value, or `None` if `raw_value` is `None`.
        """
        decode, _ = self._get_converters(type_tag)
        if raw_value is None:
            return None
        return decode(raw_value)

    def encode(self, type_tag: str, value: Any) -> Any:
        """
        Convert an application value into its raw SQL representation.

        Args:
            type_tag: A format type tag (see `Format`).
            value: The application value.

        Returns:
            The encoded value, or `None` if `value` is `None`.
        """
        _, encode = self._get_converters(type_tag)
        if value is None:
            return None
        return encode(value)


DEFAULT_CODEC = FormatCodec()
