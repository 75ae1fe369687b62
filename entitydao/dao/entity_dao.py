##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
This module defines `EntityDao`, the base class of every entity.

An entity represents one row of one table. Subclasses describe the table with
class attributes; the base class then takes care of loading rows, tracking
which values changed, and writing those changes back:

```python
class UserDao(EntityDao):
    table_name = "users"
    field_map = {"user_name": "name"}
    format_map = {"created": Format.DATETIME}
    hidden_fields = ["password"]
    timestamp_enabled = True

user = UserDao(db).find(42)
user.name = "Jane"
user.update()
```

Accessor properties are generated when a subclass is created, one for every
property in `field_map`, every column in `columns` and every primary key
column. Values that are not stored in the row can be provided with
`computed_property`.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from entitydao.connections.connection import Connection
from entitydao.dao.attribute_store import AttributeStore
from entitydao.dao.conditions import apply_conditions
from entitydao.dao.dao import Dao
from entitydao.dao.field_mapping import FieldMapping
from entitydao.dao.primary_key import KeySpec, PrimaryKeyPolicy
from entitydao.dao.relation_table import RelationTableSync
from entitydao.dao.search import SearchMixin
from entitydao.exceptions import ColumnNotFoundError, IllegalStateError, InvalidArgumentError, NotFoundError
from entitydao.formats import DEFAULT_CODEC, Format, FormatCodec
from entitydao.query import QueryBuilder, RawSql
from entitydao.utils import get_order_column, get_order_direction


LOG = logging.getLogger(__name__)

COMPUTED_COLUMN_ATTR = "_computed_column"


def computed_property(column: str) -> Callable:
    """
    Mark a method as the provider of a value that is not stored in the row.

    `get(column)` calls the method when `column` is missing from the entity's
    data. The registration is inherited by subclasses.

    Args:
        column: The column (or property) name the method provides.

    Returns:
        The decorator.
    """

    def decorator(func: Callable) -> Callable:
        setattr(func, COMPUTED_COLUMN_ATTR, column)
        return func

    return decorator


class _Accessor(property):
    """A property generated for a mapped column."""


def _make_accessor(name: str) -> _Accessor:
    def getter(self):
        return self.get(name)

    def setter(self, value):
        self.set(name, value)

    return _Accessor(getter, setter, doc=f"Value of '{name}'.")


class EntityDao(SearchMixin, Dao):  # pylint: disable=R0904
    """
    Base class for entities: one instance per table row.

    Class attributes:
        table_name (str): The table name.
        primary_key (Union[str, List[str]]): The key column, or an ordered list of key columns.
        primary_key_sequence (Optional[str]): Sequence passed to `last_insert_id` after inserts.
        field_map (Dict[str, str]): Maps column names to property names.
        value_map (Dict[str, str]): Maps property names to columns; derived from `field_map` if empty.
        format_map (Dict[str, str]): Maps column names to `Format` type tags.
        hidden_fields (List[str]): Property names left out of `get_values()`.
        columns (List[str]): Extra columns that get accessor properties.
        timestamp_enabled (bool): Whether `save`/`update` maintain timestamp columns.
        timestamp_created_col (str): The creation timestamp column.
        timestamp_updated_col (str): The modification timestamp column.
        format_codec (FormatCodec): The codec applying `format_map`.

    Methods:
        get: Return a decoded value by property or column name.
        set: Encode and set a value by property or column name.
        has: Whether a value or computed property exists for a name.
        set_data: Replace all raw values, resetting the change tracking.
        set_values: Set several values at once.
        set_defined_values: Set the values whose keys are columns of the table.
        get_values: Return the decoded, visible values keyed by property name.
        get_id: Return the primary key value(s).
        set_id: Assign the primary key value(s).
        has_id: Whether the primary key is fully assigned.
        find: Load one row by primary key or column values.
        find_all: Return every row matching a condition mapping.
        find_list: Return a mapping of index column -> value column over all rows.
        exists: Whether a row exists for a primary key or column values.
        save: Insert this entity.
        update: Write the changed values of this entity.
        delete: Delete this entity's row.
        reload: Load this entity's row again.
        wrap_all: Turn raw rows into entities.
        update_relation_table: Synchronize a many-to-many relation table.
    """

    table_name: str = ""
    primary_key: KeySpec = "id"
    primary_key_sequence: Optional[str] = None
    field_map: Dict[str, str] = {}
    value_map: Dict[str, str] = {}
    format_map: Dict[str, str] = {}
    hidden_fields: List[str] = []
    columns: List[str] = []
    timestamp_enabled: bool = False
    timestamp_created_col: str = "created"
    timestamp_updated_col: str = "updated"
    format_codec: FormatCodec = DEFAULT_CODEC

    _field_mapping: FieldMapping
    _primary_key_policy: PrimaryKeyPolicy
    _computed_properties: Dict[str, str] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._configure_entity_class()

    @classmethod
    def _configure_entity_class(cls):
        """
        Build the field mapping, the primary key policy, the computed property
        registry and the accessor properties of an entity class.
        """
        cls._field_mapping = FieldMapping(
            field_map=cls.field_map,
            value_map=cls.__dict__.get("value_map"),
            format_map=cls.format_map,
            hidden_fields=cls.hidden_fields,
            codec=cls.format_codec,
        )
        cls.value_map = dict(cls._field_mapping.value_map)
        cls._primary_key_policy = PrimaryKeyPolicy(cls.primary_key)

        computed = {}
        for klass in reversed(cls.__mro__):
            for attr_name, attr in vars(klass).items():
                column = getattr(attr, COMPUTED_COLUMN_ATTR, None)
                if column is not None:
                    computed[cls._field_mapping.to_column(column)] = attr_name
        cls._computed_properties = computed

        names = list(cls._field_mapping.property_names())
        names += [cls._field_mapping.to_property(column) for column in cls.columns]
        names += [cls._field_mapping.to_property(column) for column in cls._primary_key_policy.columns]
        names += [cls._field_mapping.to_property(column) for column in computed]
        for name in dict.fromkeys(names):
            existing = getattr(cls, name, None)
            if existing is not None and not isinstance(existing, _Accessor):
                LOG.debug(f"{cls.__name__}.{name} is already defined; use get('{name}') to read the column")
                continue
            setattr(cls, name, _make_accessor(name))

    def __init__(self, db: Optional[Connection] = None):
        """
        Create an empty entity.

        Args:
            db: The connection used by this entity.
        """
        super().__init__(db)
        self._store: AttributeStore = AttributeStore()
        self._table_name: Optional[str] = None
        self._instance_primary_key: Optional[PrimaryKeyPolicy] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._store.data!r})"

    @property
    def data(self) -> Dict[str, Any]:
        """The current raw values, keyed by column."""
        return self._store.data

    @property
    def original_data(self) -> Dict[str, Any]:
        """The raw values as last loaded or written, keyed by column."""
        return self._store.original_data

    @property
    def field_mapping(self) -> FieldMapping:
        """The field mapping of this entity type."""
        return self._field_mapping

    @property
    def primary_key_policy(self) -> PrimaryKeyPolicy:
        """The primary key policy of this entity."""
        if self._instance_primary_key is not None:
            return self._instance_primary_key
        return self._primary_key_policy

    def set_primary_key(self, key: KeySpec) -> "EntityDao":
        """
        Use a different primary key for this instance.

        Raises:
            InvalidArgumentError: If `key` is not a string or a list of strings.
        """
        self._instance_primary_key = PrimaryKeyPolicy(key)
        return self

    def set_table_name(self, table_name: str) -> "EntityDao":
        """Use a different table for this instance."""
        self._table_name = table_name
        return self

    def get_table_name(self) -> str:
        """
        Returns the table name.

        Raises:
            IllegalStateError: If no table name is configured.
        """
        table_name = self._table_name or self.table_name
        if not table_name:
            raise IllegalStateError(f"No table name set for {type(self).__name__}")
        return table_name

    def get_primary_key_name(self) -> str:
        """
        Returns the primary key column.

        Raises:
            IllegalStateError: If the primary key is compound.
        """
        return self.primary_key_policy.name

    def has_timestamp_enabled(self) -> bool:
        """Returns True if `save` and `update` maintain timestamp columns."""
        return bool(self.timestamp_enabled)

    def get_default_table_alias(self, table: str = "") -> str:
        """Returns the default alias of a table: its first character."""
        return (table or self.get_table_name())[:1]

    def _is_scalar_key_column(self, column: str) -> bool:
        policy = self.primary_key_policy
        return not policy.is_compound and column == policy.columns[0]

    # Values

    def get(self, name: str) -> Any:
        """
        Return the decoded value of a property or column.

        Args:
            name: A property name or a column name.

        Returns:
            The decoded value. For the scalar primary key, its raw value.

        Raises:
            ColumnNotFoundError: If the column has no value and no computed property.
            PrimaryKeyNotSetError: If `name` is the scalar primary key and it is not set.
        """
        column = self._field_mapping.to_column(name)

        if self._is_scalar_key_column(column):
            return self.get_id()

        if not self._store.contains(column):
            method_name = self._computed_properties.get(column)
            if method_name is not None:
                return getattr(self, method_name)()
            raise ColumnNotFoundError(f"Column not found in data: {name}")

        return self._field_mapping.decode(column, self._store.get(column))

    def set(self, name: str, value: Any) -> "EntityDao":
        """
        Encode a value and store it under the column of `name`. The scalar
        primary key can only be set once.

        Args:
            name: A property name or a column name.
            value: The application value.

        Returns:
            This entity.

        Raises:
            PrimaryKeyAlreadySetError: If `name` is the scalar primary key and it is already set.
        """
        column = self._field_mapping.to_column(name)
        value = self._field_mapping.encode(column, value)

        if self._is_scalar_key_column(column):
            self.set_id(value)
        else:
            self._store.set(column, value)
        return self

    def has(self, name: str) -> bool:
        """Returns True if `name` has a value or a computed property."""
        column = self._field_mapping.to_column(name)
        return self._store.contains(column) or column in self._computed_properties

    def set_data(self, data: Mapping[str, Any]) -> "EntityDao":
        """
        Replace all raw values. The new values are also the new original
        values, so the entity has no changes afterwards.

        Args:
            data: Raw values keyed by column.

        Returns:
            This entity.
        """
        self._store.reset(data)
        return self

    def set_values(self, values: Mapping[str, Any]) -> "EntityDao":
        """
        Set several values at once (see `set`).

        Args:
            values: Application values keyed by property or column name.

        Returns:
            This entity.
        """
        for name, value in values.items():
            self.set(name, value)
        return self

    def set_defined_values(self, data: Mapping[str, Any]) -> "EntityDao":
        """
        Set the values whose keys are columns of the table; other keys are ignored.

        Args:
            data: Application values keyed by column name.

        Returns:
            This entity.
        """
        for column in self.describe_table(self.get_table_name()):
            if column in data:
                self.set(column, data[column])
        return self

    def get_values(self) -> Dict[str, Any]:
        """
        Returns the decoded values keyed by property name, without hidden fields.
        """
        return self._field_mapping.project(self._store.data)

    # Primary key

    def get_id(self) -> Union[Any, Dict[str, Any]]:
        """
        Returns the primary key value, or a dictionary of column -> value for compound keys.

        Raises:
            PrimaryKeyNotSetError: If a scalar key is not set.
            PrimaryKeyIncompleteError: If a compound key is not fully set.
        """
        return self.primary_key_policy.get_id(self._store.data)

    def set_id(self, value: Any) -> "EntityDao":
        """
        Assign the primary key.

        Args:
            value: The key value, or a mapping of column -> value for compound keys.

        Returns:
            This entity.
        """
        self.primary_key_policy.set_id(self._store.data, value)
        return self

    def has_id(self) -> bool:
        """Returns True if the primary key is fully set."""
        return self.primary_key_policy.has_id(self._store.data)

    def where_clause(self) -> List[Tuple[str, Any]]:
        """Returns the `(column, value)` pairs identifying this entity's row."""
        return self.primary_key_policy.where_clause(self._store.data)

    # Queries

    def _select_all(self) -> QueryBuilder:
        table = self.get_table_name()
        query = self.create_query_builder()
        query.select("*").from_(self.db.quote_identifier(table), self.get_default_table_alias(table))
        return query

    def _lookup_query(self, key: Any) -> QueryBuilder:
        """
        Build the query used by `find` and `exists`.

        Raises:
            InvalidArgumentError: If `key` is a scalar and the primary key is compound,
                or if `key` is an empty mapping.
        """
        db = self.db
        query = self._select_all()

        if isinstance(key, Mapping):
            if not key:
                raise InvalidArgumentError("Lookup requires at least one column value")
            for column, value in key.items():
                value = self._field_mapping.encode(column, value)
                if value is None:
                    query.and_where(f"{db.quote_identifier(column)} IS NULL")
                else:
                    query.and_where(f"{db.quote_identifier(column)} = {db.quote(value)}")
            return query

        pk_column = self.primary_key_policy.lookup_column
        if pk_column is None:
            raise InvalidArgumentError("The id must be a mapping for compound primary keys")
        value = self._field_mapping.encode(pk_column, key)
        query.where(f"{db.quote_identifier(pk_column)} = {db.quote(value)}")
        return query

    def find(self, key: Any) -> "EntityDao":
        """
        Load one row into this entity.

        Args:
            key: A primary key value, or a mapping of column -> value.

        Returns:
            This entity.

        Raises:
            NotFoundError: If no row matches.
            InvalidArgumentError: If `key` is a scalar and the primary key is compound.
        """
        row = self.db.fetch_assoc(self._lookup_query(key).get_sql())
        if row is None:
            raise NotFoundError(f"No matching row found in '{self.get_table_name()}' for {key!r}")
        self.set_data(row)
        return self

    def exists(self, key: Any) -> bool:
        """
        Returns True if a row matches `key` (a primary key value or a mapping of column -> value).
        """
        return self.db.fetch_assoc(self._lookup_query(key).get_sql()) is not None

    def find_all(self, cond: Mapping[Any, Any] = None, wrap: bool = True) -> List[Any]:
        """
        Return every row matching a condition mapping (see `entitydao.dao.conditions`).
        Use `search` for pagination, ordering and counting.

        Args:
            cond: The condition mapping; every row matches if empty.
            wrap: Whether to return entities instead of raw rows.

        Returns:
            Entities, or rows as dictionaries.
        """
        query = self._select_all()
        apply_conditions(query, cond, self.db, self.primary_key_policy, self._field_mapping)
        rows = self.fetch_all(query)
        LOG.debug(f"find_all on '{self.get_table_name()}' returned {len(rows)} rows")
        return self.wrap_all(rows) if wrap else rows

    def find_list(
        self, col_name: str, order: str = "", where: Union[RawSql, Mapping[Any, Any], None] = None, index_name: str = ""
    ) -> Dict[Any, Any]:
        """
        Return a mapping of `index_name` -> `col_name` over all matching rows.

        Args:
            col_name: The value column.
            order: An optional `"column [ASC|DESC]"` order token.
            where: An optional filter, as `RawSql` or as a condition mapping.
            index_name: The key column; defaults to the primary key.

        Returns:
            The mapping, in query order.

        Raises:
            InvalidArgumentError: If `where` is a plain string.
        """
        db = self.db
        index_name = index_name or self.get_primary_key_name()
        table = self.get_table_name()

        query = self.create_query_builder()
        query.select(db.quote_identifier(index_name), db.quote_identifier(col_name))
        query.from_(db.quote_identifier(table), self.get_default_table_alias(table))

        if isinstance(where, RawSql):
            if where:
                query.where(where)
        elif isinstance(where, Mapping):
            apply_conditions(query, where, db, self.primary_key_policy, self._field_mapping)
        elif where:
            raise InvalidArgumentError("where must be a RawSql fragment or a condition mapping")

        if order:
            query.order_by(get_order_column(order), get_order_direction(order))

        return {row[index_name]: row[col_name] for row in self.fetch_all(query)}

    def wrap_all(self, rows: Iterable[Mapping[str, Any]]) -> List["EntityDao"]:
        """
        Create one new entity of this type per row, sharing this entity's connection.

        Args:
            rows: Raw rows keyed by column.

        Returns:
            The entities.
        """
        result = []
        for row in rows:
            entity = type(self)(self._db)
            if self._table_name:
                entity.set_table_name(self._table_name)
            if self._instance_primary_key is not None:
                entity._instance_primary_key = self._instance_primary_key  # pylint: disable=W0212
            result.append(entity.set_data(row))
        return result

    def get_fulltext_condition(self, value: str, keys: Iterable[str]) -> RawSql:
        """
        Build a case-insensitive substring match of `value` over several columns.
        `*` in `value` is a wildcard.

        Args:
            value: The text to search for.
            keys: The columns to search.

        Returns:
            The condition, OR-ing one `LIKE` per column.
        """
        db = self.db
        pattern = db.quote(f"%{value}%".replace("*", "%"))
        conditions = [f"UPPER({db.quote_identifier(key)}) LIKE UPPER({pattern})" for key in keys]
        return RawSql("(" + " OR ".join(conditions) + ")")

    # Persistence

    def _now(self) -> str:
        return self.get_datetime_instance().strftime(Format.DATETIME_LAYOUT)

    def save(self) -> "EntityDao":
        """
        Insert this entity as a new row. With timestamps enabled, empty creation
        and modification timestamps are set to now. A missing scalar primary key
        is read back from the connection after the insert.

        Returns:
            This entity.
        """
        db = self.db
        table = self.get_table_name()
        insert_fields = dict(self._store.data)

        if self.has_timestamp_enabled():
            now = self._now()
            for column in (self.timestamp_created_col, self.timestamp_updated_col):
                if not insert_fields.get(column):
                    insert_fields[column] = now

        db.insert(table, insert_fields)

        policy = self.primary_key_policy
        if not policy.is_compound and insert_fields.get(policy.columns[0]) is None:
            insert_fields[policy.columns[0]] = db.last_insert_id(self.primary_key_sequence)

        self._store.reset(insert_fields)
        LOG.debug(f"Inserted row into '{table}'")
        return self

    def update(self) -> bool:
        """
        Write the values changed since the last load or write. Primary key
        columns are never written. With timestamps enabled, the modification
        timestamp is set to now.

        Returns:
            True if a row was updated, False if nothing changed.
        """
        fields = self._store.changes(exclude=self.primary_key_policy.columns)
        if not fields:
            LOG.debug(f"No changes to write for {type(self).__name__}")
            return False

        if self.has_timestamp_enabled():
            now = self._now()
            fields[self.timestamp_updated_col] = now
            self._store.set(self.timestamp_updated_col, now)

        table = self.get_table_name()
        self.db.update(table, fields, self.where_clause())
        self._store.snapshot()
        LOG.debug(f"Updated columns {list(fields)} of '{table}'")
        return True

    def delete(self) -> int:
        """
        Delete this entity's row. The entity keeps its values.

        Returns:
            The number of deleted rows reported by the connection.
        """
        return self.db.delete(self.get_table_name(), self.where_clause())

    def reload(self) -> "EntityDao":
        """
        Load this entity's row again, discarding unsaved changes.

        Raises:
            NotFoundError: If the row no longer exists.
        """
        return self.find(dict(self.where_clause()))

    def update_relation_table(
        self,
        relation_table: str,
        primary_key_name: str,
        foreign_key_name: str,
        existing: Iterable[Any],
        updated: Iterable[Any],
    ) -> "EntityDao":
        """
        Synchronize the rows of a many-to-many relation table that reference this entity.

        Args:
            relation_table: The relation table.
            primary_key_name: The column referencing this entity.
            foreign_key_name: The column referencing the related entity.
            existing: The ids currently related.
            updated: The ids that should be related.

        Returns:
            This entity.
        """
        RelationTableSync(self.db, relation_table, primary_key_name, foreign_key_name).sync(
            self.get_id(), existing, updated
        )
        return self


EntityDao._configure_entity_class()  # pylint: disable=W0212
