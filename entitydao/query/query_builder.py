##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
A small, fluent SELECT query builder.

`QueryBuilder` accumulates the parts of a SELECT statement and renders them
to SQL text on demand. All conditions are raw SQL fragments: values must be
quoted by the caller (see `Connection.quote`). A builder can be cloned with
`copy()`, which yields an independent builder sharing no mutable state with
the original.
"""

from copy import deepcopy
from typing import Dict, Iterable, List, Optional, Tuple, Union

from entitydao.query.raw_sql import RawSql


# Largest signed 64-bit integer; used as LIMIT when only an offset is given
MAX_LIMIT = 9223372036854775807

Fragment = Union[str, RawSql, "CompositeExpression"]


class CompositeExpression:
    """
    A list of conditions joined by `AND` or `OR`.

    Attributes:
        type (str): Either "AND" or "OR".
        parts (List[Fragment]): The joined conditions.
    """

    AND = "AND"
    OR = "OR"

    def __init__(self, expr_type: str, parts: Iterable[Fragment] = ()):
        self.type: str = expr_type
        self.parts: List[Fragment] = [part for part in parts if part]

    def add(self, part: Fragment) -> "CompositeExpression":
        """
        Append a condition to this expression. Empty conditions are ignored.

        Args:
            part: The condition to append.

        Returns:
            This expression.
        """
        if part:
            self.parts.append(part)
        return self

    def __len__(self) -> int:
        return len(self.parts)

    def __str__(self) -> str:
        if len(self.parts) == 1:
            return str(self.parts[0])
        return "(" + f") {self.type} (".join(str(part) for part in self.parts) + ")"


class QueryBuilder:  # pylint: disable=R0902
    """
    Fluent builder for SELECT statements.

    Methods:
        select: Replace the projection.
        add_select: Extend the projection.
        from_: Set the table (and alias) to select from.
        where: Replace the WHERE condition.
        and_where: Add a condition joined with `AND`.
        or_where: Add a condition joined with `OR`.
        join: Add an INNER JOIN (alias of `inner_join`).
        inner_join: Add an INNER JOIN.
        left_join: Add a LEFT JOIN.
        group_by: Replace the GROUP BY columns.
        add_group_by: Extend the GROUP BY columns.
        order_by: Replace the ORDER BY clause.
        add_order_by: Extend the ORDER BY clause.
        set_max_results: Set the LIMIT.
        set_first_result: Set the OFFSET.
        get_sql: Render the SQL text.
        copy: Return an independent clone of this builder.
    """

    def __init__(self):
        self._select: List[str] = []
        self._from: Optional[Tuple[str, Optional[str]]] = None
        self._joins: Dict[str, List[Tuple[str, str, str, str]]] = {}
        self._where: Optional[CompositeExpression] = None
        self._group_by: List[str] = []
        self._order_by: List[str] = []
        self._max_results: Optional[int] = None
        self._first_result: int = 0

    @staticmethod
    def _flatten(columns: Tuple) -> List[str]:
        result = []
        for column in columns:
            if isinstance(column, (list, tuple)):
                result.extend(str(col) for col in column)
            elif column:
                result.append(str(column))
        return result

    def select(self, *columns) -> "QueryBuilder":
        """
        Replace the projection of this query.

        Args:
            columns: Column expressions, given individually or as lists.

        Returns:
            This builder.
        """
        self._select = self._flatten(columns)
        return self

    def add_select(self, *columns) -> "QueryBuilder":
        """
        Add column expressions to the projection of this query.

        Args:
            columns: Column expressions, given individually or as lists.

        Returns:
            This builder.
        """
        self._select.extend(self._flatten(columns))
        return self

    def from_(self, table: str, alias: str = None) -> "QueryBuilder":
        """
        Set the table this query selects from.

        Args:
            table: The table name.
            alias: An optional table alias.

        Returns:
            This builder.
        """
        self._from = (table, alias)
        return self

    def where(self, condition: Fragment) -> "QueryBuilder":
        """
        Replace the WHERE condition of this query.

        Args:
            condition: A raw SQL condition.

        Returns:
            This builder.
        """
        self._where = CompositeExpression(CompositeExpression.AND, [condition])
        return self

    def and_where(self, condition: Fragment) -> "QueryBuilder":
        """
        Add a condition that must hold in addition to the existing ones.

        Args:
            condition: A raw SQL condition.

        Returns:
            This builder.
        """
        self._where = self._combine(CompositeExpression.AND, condition)
        return self

    def or_where(self, condition: Fragment) -> "QueryBuilder":
        """
        Add a condition that may hold instead of the existing ones.

        Args:
            condition: A raw SQL condition.

        Returns:
            This builder.
        """
        self._where = self._combine(CompositeExpression.OR, condition)
        return self

    def _combine(self, expr_type: str, condition: Fragment) -> CompositeExpression:
        current = self._where
        if current is not None and (current.type == expr_type or len(current) <= 1):
            # A single condition can be re-typed without changing its meaning
            return CompositeExpression(expr_type, current.parts).add(condition)
        return CompositeExpression(expr_type, [current, condition])

    def _add_join(self, join_type: str, from_alias: str, table: str, alias: str, condition: Fragment = None):
        self._joins.setdefault(from_alias, []).append((join_type, table, alias, str(condition) if condition else ""))

    def inner_join(self, from_alias: str, table: str, alias: str, condition: Fragment = None) -> "QueryBuilder":
        """
        Add an INNER JOIN attached to the table aliased `from_alias`.

        Args:
            from_alias: Alias of the table being joined to.
            table: The joined table.
            alias: Alias of the joined table.
            condition: The ON condition.

        Returns:
            This builder.
        """
        self._add_join("INNER", from_alias, table, alias, condition)
        return self

    join = inner_join

    def left_join(self, from_alias: str, table: str, alias: str, condition: Fragment = None) -> "QueryBuilder":
        """
        Add a LEFT JOIN attached to the table aliased `from_alias`.

        Args:
            from_alias: Alias of the table being joined to.
            table: The joined table.
            alias: Alias of the joined table.
            condition: The ON condition.

        Returns:
            This builder.
        """
        self._add_join("LEFT", from_alias, table, alias, condition)
        return self

    def group_by(self, *columns) -> "QueryBuilder":
        """Replace the GROUP BY columns."""
        self._group_by = self._flatten(columns)
        return self

    def add_group_by(self, *columns) -> "QueryBuilder":
        """Add GROUP BY columns."""
        self._group_by.extend(self._flatten(columns))
        return self

    def order_by(self, column: str, direction: str = "ASC") -> "QueryBuilder":
        """Replace the ORDER BY clause."""
        self._order_by = []
        return self.add_order_by(column, direction)

    def add_order_by(self, column: str, direction: str = "ASC") -> "QueryBuilder":
        """
        Add a sort column.

        Args:
            column: The column expression.
            direction: "ASC" or "DESC".

        Returns:
            This builder.
        """
        self._order_by.append(f"{column} {direction}" if direction else column)
        return self

    def set_max_results(self, max_results: Optional[int]) -> "QueryBuilder":
        """Set the maximum number of rows (LIMIT); `None` removes the limit."""
        self._max_results = max_results
        return self

    def set_first_result(self, first_result: int) -> "QueryBuilder":
        """Set the number of rows to skip (OFFSET)."""
        self._first_result = int(first_result or 0)
        return self

    def get_max_results(self) -> Optional[int]:
        """Returns the LIMIT of this query."""
        return self._max_results

    def get_first_result(self) -> int:
        """Returns the OFFSET of this query."""
        return self._first_result

    def _render_joins(self, alias: str, rendered: set) -> str:
        sql = ""
        for join_type, table, join_alias, condition in self._joins.get(alias, []):
            sql += f" {join_type} JOIN {table} {join_alias}"
            if condition:
                sql += f" ON {condition}"
            if join_alias not in rendered:
                rendered.add(join_alias)
                sql += self._render_joins(join_alias, rendered)
        return sql

    def get_sql(self) -> str:
        """
        Render this query to SQL text.

        Returns:
            The SELECT statement.
        """
        sql = "SELECT " + (", ".join(self._select) if self._select else "*")

        if self._from is not None:
            table, alias = self._from
            sql += f" FROM {table}"
            if alias:
                sql += f" {alias}"
                sql += self._render_joins(alias, {alias})

        if self._where is not None and len(self._where):
            sql += f" WHERE {self._where}"

        if self._group_by:
            sql += " GROUP BY " + ", ".join(self._group_by)

        if self._order_by:
            sql += " ORDER BY " + ", ".join(self._order_by)

        if self._max_results is not None:
            sql += f" LIMIT {int(self._max_results)}"
            if self._first_result:
                sql += f" OFFSET {self._first_result}"
        elif self._first_result:
            sql += f" LIMIT {MAX_LIMIT} OFFSET {self._first_result}"

        return sql

    def copy(self) -> "QueryBuilder":
        """
        Clone this builder. The clone keeps every accumulated clause and can
        be modified without affecting this builder.

        Returns:
            The clone.
        """
        return deepcopy(self)

    def __str__(self) -> str:
        return self.get_sql()
