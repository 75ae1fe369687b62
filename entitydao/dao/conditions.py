##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
The condition mapping understood by `find_all` and `search`.

Each `(key, value)` pair of a condition mapping adds one clause to a query,
in insertion order:

| key | value                     | clause                        |
|-----|---------------------------|-------------------------------|
| int | scalar                    | OR `pk = value`               |
| int | `RawSql`                  | AND the raw fragment          |
| int | list/tuple/set            | AND `pk IN (...)`             |
| str | non-empty list/tuple/set  | AND `col IN (...)`            |
| str | empty list/tuple/set      | AND `1 = 0`                   |
| str | None                      | AND `col IS NULL`             |
| str | scalar                    | AND `col = value`             |

Values are encoded with the entity's formats and quoted by the connection.
An empty list matches nothing.
"""

import logging
from typing import Any, Callable, Iterable, Mapping

from entitydao.connections.connection import Connection
from entitydao.dao.field_mapping import FieldMapping
from entitydao.dao.primary_key import PrimaryKeyPolicy
from entitydao.exceptions import IllegalStateError, InvalidArgumentError
from entitydao.query import QueryBuilder, RawSql


LOG = logging.getLogger(__name__)

MATCH_NOTHING = "1 = 0"

SEQUENCE_TYPES = (list, tuple, set, frozenset)


def sql_in_list(db: Connection, values: Iterable[Any]) -> str:
    """
    Quote values and join them with commas for use in `IN (...)`.

    Args:
        db: The connection used for quoting.
        values: The values.

    Returns:
        The comma separated literals.
    """
    return ",".join(db.quote(value) for value in values)


def in_condition(db: Connection, quoted_column: str, values: Iterable[Any]) -> str:
    """
    Build `column IN (...)`, or a condition matching nothing when `values` is empty.

    Args:
        db: The connection used for quoting.
        quoted_column: The already quoted column.
        values: The values.

    Returns:
        The SQL condition.
    """
    values = list(values)
    if not values:
        return MATCH_NOTHING
    return f"{quoted_column} IN ({sql_in_list(db, values)})"


def _is_int_key(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def apply_conditions(  # pylint: disable=R0913
    query: QueryBuilder,
    cond: Mapping[Any, Any],
    db: Connection,
    primary_key: PrimaryKeyPolicy,
    mapping: FieldMapping,
    quote_key: Callable[[str], str] = None,
) -> QueryBuilder:
    """
    Add the clauses described by a condition mapping to a query.

    Args:
        query: The query to add the clauses to.
        cond: The condition mapping.
        db: The connection used for quoting.
        primary_key: The primary key of the searched entity.
        mapping: The field mapping of the searched entity; used to encode values.
        quote_key: Function quoting a column name; defaults to `db.quote_identifier`.

    Returns:
        The query.

    Raises:
        IllegalStateError: If an integer key is used with a compound primary key.
        InvalidArgumentError: If an integer key is paired with None.
    """
    quote_key = quote_key or db.quote_identifier

    for key, value in (cond or {}).items():
        if _is_int_key(key):
            if isinstance(value, RawSql):
                query.and_where(value)
                continue

            pk_column = primary_key.lookup_column
            if pk_column is None:
                raise IllegalStateError("Integer condition keys require a single column primary key")

            if isinstance(value, SEQUENCE_TYPES):
                values = [mapping.encode(pk_column, item) for item in value]
                query.and_where(in_condition(db, quote_key(pk_column), values))
            elif value is None:
                raise InvalidArgumentError(f"Condition {key} has no value")
            else:
                encoded = mapping.encode(pk_column, value)
                query.or_where(f"{quote_key(pk_column)} = {db.quote(encoded)}")
        elif isinstance(key, str):
            # Formats are declared per column, without a table prefix
            column = key.rsplit(".", 1)[-1]
            if isinstance(value, SEQUENCE_TYPES):
                values = [mapping.encode(column, item) for item in value]
                query.and_where(in_condition(db, quote_key(key), values))
            elif value is None:
                query.and_where(f"{quote_key(key)} IS NULL")
            else:
                query.and_where(f"{quote_key(key)} = {db.quote(mapping.encode(column, value))}")
        else:
            raise InvalidArgumentError(f"Unsupported condition key: {key!r}")

    return query
