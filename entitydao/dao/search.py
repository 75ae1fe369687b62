##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Filtered, paginated and counted searches over an entity's table.

`SearchMixin.search` builds a result query and a count query from a
`SearchParams` bag, runs the result query and determines the total number of
matching rows, avoiding the count query whenever the first page already holds
every match. Subclasses can rewrite the generated queries by overriding
`optimize_search_query`.
"""

import logging
import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

from entitydao.dao.conditions import apply_conditions, in_condition
from entitydao.exceptions import IllegalStateError, InvalidArgumentError
from entitydao.query import QueryBuilder, RawSql
from entitydao.utils import ensure_list, get_order_column, get_order_direction, split_order_token


LOG = logging.getLogger(__name__)

JoinSpec = Sequence[str]


@dataclass
class SearchParams:  # pylint: disable=R0902
    """
    Parameters of a search. Every field is optional.

    Attributes:
        table: Table to search; defaults to the entity's table.
        table_alias: Alias of `table`; defaults to its first character.
        cond: Condition mapping (see `entitydao.dao.conditions`).
        count: Page size; a falsy value disables pagination.
        offset: Number of rows to skip (only applied together with `count`).
        count_total: Whether to determine the total number of matches.
        join: INNER JOINs as `(from_alias, table, alias, condition[, extra_select])` tuples.
        left_join: LEFT JOINs, same shape as `join`.
        columns: Columns to select instead of `alias.*`.
        order: One or more `"column [ASC|DESC]"` tokens.
        group: One or more GROUP BY columns.
        wrap: Whether to return entities instead of raw rows.
        ids_only: Whether to return primary key values only.
        sql_filter: An additional trusted condition.
        id_filter: Restrict the search to these primary key values.
    """

    table: str = ""
    table_alias: str = ""
    cond: Mapping[Any, Any] = field(default_factory=dict)
    count: Optional[int] = 20
    offset: int = 0
    count_total: bool = True
    join: Optional[List[JoinSpec]] = None
    left_join: Optional[List[JoinSpec]] = None
    columns: Optional[List[str]] = None
    order: Union[str, List[str], None] = None
    group: Union[str, List[str], None] = None
    wrap: bool = True
    ids_only: bool = False
    sql_filter: Optional[RawSql] = None
    id_filter: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> "SearchParams":
        """
        Build search parameters from a dictionary, ignoring unknown keys.

        Args:
            params: The parameters given by the caller.

        Returns:
            The merged parameters.
        """
        known = {param.name for param in fields(cls)}
        unknown = [key for key in params if key not in known]
        if unknown:
            LOG.debug(f"Ignoring unknown search parameters: {unknown}")
        return cls(**{key: value for key, value in params.items() if key in known})


@dataclass(frozen=True)
class SearchResult:  # pylint: disable=R0902
    """
    The outcome of a search.

    Attributes:
        rows: Entities, raw rows or primary key values, depending on the parameters.
        order: The order parameter of the search.
        count: The page size of the search.
        offset: The offset of the search.
        total: The number of matching rows, regardless of pagination.
        filter_sql: The result query before `sql_filter`, pagination and ordering were applied.
        sql: The executed result query.
        table_pk: The primary key column, or "" for compound keys.
        table_alias: The alias of the searched table.
    """

    rows: List[Any]
    order: Union[str, List[str], None]
    count: Optional[int]
    offset: int
    total: int
    filter_sql: str
    sql: str
    table_pk: str
    table_alias: str

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.rows)

    def first(self) -> Any:
        """Returns the first row, or None if there are no rows."""
        return self.rows[0] if self.rows else None

    @property
    def page_count(self) -> int:
        """The number of pages needed to show every match."""
        if not self.count:
            return 1 if self.total else 0
        return math.ceil(self.total / self.count)

    @property
    def has_more(self) -> bool:
        """Whether more matches follow this page."""
        return (self.offset or 0) + len(self.rows) < self.total

    def to_dicts(self) -> List[Any]:
        """
        Returns the rows as dictionaries: entities are converted with
        `get_values()`, other rows are returned as they are.
        """
        return [row.get_values() if hasattr(row, "get_values") else row for row in self.rows]


class SearchMixin:
    """
    Adds `search` to an entity DAO.

    Expects the host class to provide `db`, `get_table_name`,
    `get_default_table_alias`, `primary_key_policy`, `field_mapping`,
    `create_query_builder`, the fetch helpers and `wrap_all`.

    Methods:
        search: Run a search and return a `SearchResult`.
        optimize_search_query: Hook for rewriting the generated queries.
        get_quoted_key: Quote a column for use in a search query.
        column_is_required: Whether a search needs a given column.
    """

    def get_quoted_key(self, key: str, table_alias: str) -> str:
        """
        Quote a column, qualified with a table alias. A key of the form
        `table.column` keeps its table part, except that the entity's own
        table name is replaced with `table_alias`. Keys with more parts (e.g.
        `schema.table.column`) are quoted as they are.

        Args:
            key: A column name, optionally prefixed with a table name or alias.
            table_alias: The alias of the entity's table.

        Returns:
            The quoted, qualified column.
        """
        parts = key.split(".")
        if len(parts) == 2:
            table = table_alias if parts[0] == self.get_table_name() else parts[0]
            return self.db.quote_identifier(f"{table}.{parts[1]}")
        if len(parts) > 2:
            return self.db.quote_identifier(key)
        return self.db.quote_identifier(f"{table_alias}.{key}")

    def optimize_search_query(  # pylint: disable=W0613
        self, query: QueryBuilder, params: SearchParams
    ) -> Union[QueryBuilder, str]:
        """
        Rewrite a generated search query. Called for the result query and for the
        count query. The default implementation returns `query` unchanged.

        Args:
            query: The query.
            params: The parameters of the search.

        Returns:
            The query to run, as a builder or as SQL text.
        """
        return query

    @staticmethod
    def column_is_required(params: SearchParams, column: str) -> bool:
        """
        Whether a search needs `column`: it does if all columns are selected, if
        `column` is one of the selected columns or if results are ordered by it.

        Args:
            params: The parameters of the search.
            column: The column name.

        Returns:
            True if the column is required.
        """
        if not params.columns or column in params.columns:
            return True
        for token in ensure_list(params.order):
            parts = split_order_token(token)
            if parts and parts[0] == column:
                return True
        return False

    @staticmethod
    def _check_sql_filter(sql_filter: Any) -> Optional[RawSql]:
        if not sql_filter:
            return None
        if isinstance(sql_filter, RawSql):
            return sql_filter
        raise InvalidArgumentError("sql_filter must be wrapped in RawSql to mark it as a trusted fragment")

    def search(self, params: Union[SearchParams, Mapping[str, Any], None] = None) -> SearchResult:
        """
        Search the entity's table.

        Args:
            params: A `SearchParams` instance or a dictionary of search parameters.

        Returns:
            The rows of the requested page and the total number of matches.

        Raises:
            InvalidArgumentError: If `sql_filter` is a plain string.
            IllegalStateError: If `id_filter` or `ids_only` is used with a compound primary key.
        """
        if isinstance(params, SearchParams):
            params = replace(params)
        else:
            params = SearchParams.from_dict(params or {})

        table = params.table or self.get_table_name()
        alias = params.table_alias or self.get_default_table_alias(table)
        params = replace(params, table=table, table_alias=alias)
        sql_filter = self._check_sql_filter(params.sql_filter)

        db = self.db
        is_mysql = db.is_mysql_family()
        primary_key = self.primary_key_policy

        def quote_key(key: str) -> str:
            return self.get_quoted_key(key, alias)

        query = self.create_query_builder()
        apply_conditions(query, params.cond, db, primary_key, self.field_mapping, quote_key)

        if params.id_filter:
            pk_column = primary_key.name
            id_values = [self.field_mapping.encode(pk_column, value) for value in params.id_filter]
            query.and_where(in_condition(db, quote_key(pk_column), id_values))

        group = [column for column in ensure_list(params.group) if column and str(column).strip()]
        if group:
            query.group_by(group)

        count_query = query.copy()

        if params.columns:
            for column in ensure_list(params.columns):
                query.add_select(column.replace(f"{self.get_table_name()}.", f"{alias}."))
        else:
            query.add_select(f"{alias}.*")

        for join_method, joins in (("inner_join", params.join), ("left_join", params.left_join)):
            for join in joins or []:
                from_alias, join_table, join_alias, condition = join[:4]
                getattr(count_query, join_method)(from_alias, join_table, join_alias, condition)
                getattr(query, join_method)(from_alias, join_table, join_alias, condition)
                if not params.ids_only and len(join) > 4 and join[4]:
                    query.add_select(join[4])

        if params.ids_only:
            query.select(f"{quote_key(primary_key.name)} AS id")

        query.from_(db.quote_identifier(table), alias)
        count_query.from_(db.quote_identifier(table), alias)

        filter_sql = query.get_sql()

        if sql_filter:
            query.and_where(sql_filter)
            count_query.and_where(sql_filter)

        if params.count:
            query.set_max_results(params.count).set_first_result(params.offset)

        for token in ensure_list(params.order):
            order_column = get_order_column(token or "")
            if order_column:
                query.add_order_by(order_column, get_order_direction(token))

        sql = str(self.optimize_search_query(query, params))

        if params.count_total and group and is_mysql:
            sql = "SELECT SQL_CALC_FOUND_ROWS" + sql[len("SELECT") :]

        if params.ids_only:
            rows = self.fetch_col(sql)
        else:
            rows = self.fetch_all(sql)
            if params.wrap:
                rows = self.wrap_all(rows)

        total = self._count_total(params, rows, count_query, group, is_mysql)

        try:
            table_pk = primary_key.name
        except IllegalStateError:
            table_pk = ""

        LOG.debug(f"Search on '{table}' returned {len(rows)} of {total} rows")

        return SearchResult(
            rows=rows,
            order=params.order,
            count=params.count,
            offset=params.offset,
            total=total,
            filter_sql=filter_sql,
            sql=sql,
            table_pk=table_pk,
            table_alias=alias,
        )

    def _count_total(  # pylint: disable=R0913
        self, params: SearchParams, rows: List[Any], count_query: QueryBuilder, group: List[str], is_mysql: bool
    ) -> int:
        """
        Determine the number of matching rows. No extra query is needed if
        counting is disabled or if the first page already holds every match.
        """
        if not params.count_total:
            return len(rows)

        if (not params.count or len(rows) < params.count) and not params.offset:
            return len(rows)

        if group and is_mysql:
            return int(self.fetch_single_value("SELECT FOUND_ROWS()") or 0)

        if group:
            # Grouped rows are counted in a subquery; a plain COUNT would count per group
            count_query.select("1")
            count_sql = str(self.optimize_search_query(count_query, params))
            count_sql = f"SELECT COUNT(1) AS count FROM ({count_sql}) grouped_rows"
        else:
            count_query.select("COUNT(1) AS count")
            count_sql = str(self.optimize_search_query(count_query, params))

        return int(self.fetch_single_value(count_sql) or 0)
