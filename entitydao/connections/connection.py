##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
This module defines the abstract base class for every database connection
used by entitydao DAOs.

A `Connection` wraps a driver connection and offers the small set of
operations DAOs rely on: identifier/value quoting, parameterized
insert/update/delete, fetch helpers, transactions and identification of the
database platform. DAOs borrow a connection; they never open, pool or close it.
"""

import logging
import math
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, Generator, List, Mapping, Optional, Sequence, Tuple, Union

from entitydao.exceptions import InvalidArgumentError


LOG = logging.getLogger(__name__)

MYSQL_FAMILY = ("mysql", "mariadb")

WhereSpec = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]


class Connection(ABC):
    """
    Base class for all connections supported in entitydao.

    Attributes:
        platform (str): Lowercase name of the database platform (e.g. "sqlite", "mysql").
        identifier_quote (str): Character used to quote identifiers.

    Methods:
        execute: Execute a statement and return the number of affected rows.
        fetch_all: Fetch every row of a query as dictionaries.
        list_columns: Return the column names of a table.
        last_insert_id: Return the id generated by the last insert.
        begin_transaction: Start a transaction.
        commit: Commit the current transaction.
        rollback: Roll back the current transaction.
        close: Close the underlying driver connection.
        quote_identifier: Quote a (possibly dotted) identifier.
        quote: Quote a value as an SQL literal.
        insert: Insert a row.
        update: Update the rows matching a set of column values.
        delete: Delete the rows matching a set of column values.
        fetch_assoc: Fetch the first row of a query as a dictionary.
        fetch_col: Fetch the first column of every row of a query.
        fetch_single_value: Fetch the first column of the first row of a query.
        transaction: Context manager wrapping a block in a transaction.
        is_mysql_family: Whether the platform is MySQL or MariaDB.
    """

    platform: str = ""
    identifier_quote: str = '"'

    @abstractmethod
    def execute(self, sql: str, params: Sequence[Any] = None) -> int:
        """
        Execute a statement.

        Args:
            sql: The SQL statement, using `?` style placeholders.
            params: Values for the placeholders.

        Returns:
            The number of affected rows as reported by the driver.
        """
        raise NotImplementedError("Subclasses of `Connection` must implement an `execute` method.")

    @abstractmethod
    def fetch_all(self, sql: str, params: Sequence[Any] = None) -> List[Dict[str, Any]]:
        """
        Fetch every row of a query.

        Args:
            sql: The SELECT statement, using `?` style placeholders.
            params: Values for the placeholders.

        Returns:
            A list of rows, each a dictionary keyed by column name.
        """
        raise NotImplementedError("Subclasses of `Connection` must implement a `fetch_all` method.")

    @abstractmethod
    def list_columns(self, table: str) -> List[str]:
        """
        Return the column names of a table.

        Args:
            table: The table name.

        Returns:
            The column names, in table order.
        """
        raise NotImplementedError("Subclasses of `Connection` must implement a `list_columns` method.")

    @abstractmethod
    def last_insert_id(self, sequence: Optional[str] = None) -> Any:
        """
        Return the id generated by the last insert on this connection.

        Args:
            sequence: Optional sequence name, for platforms that use sequences.

        Returns:
            The generated id.
        """
        raise NotImplementedError("Subclasses of `Connection` must implement a `last_insert_id` method.")

    @abstractmethod
    def begin_transaction(self):
        """Start a transaction."""
        raise NotImplementedError("Subclasses of `Connection` must implement a `begin_transaction` method.")

    @abstractmethod
    def commit(self):
        """Commit the current transaction."""
        raise NotImplementedError("Subclasses of `Connection` must implement a `commit` method.")

    @abstractmethod
    def rollback(self):
        """Roll back the current transaction."""
        raise NotImplementedError("Subclasses of `Connection` must implement a `rollback` method.")

    @abstractmethod
    def close(self):
        """Close the underlying driver connection."""
        raise NotImplementedError("Subclasses of `Connection` must implement a `close` method.")

    def is_mysql_family(self) -> bool:
        """
        Returns True if this connection talks to MySQL or MariaDB.
        """
        return self.platform.lower() in MYSQL_FAMILY

    def quote_identifier(self, identifier: str) -> str:
        """
        Quote an identifier. Dotted identifiers (`table.column`) are quoted
        part by part and `*` is never quoted.

        Args:
            identifier: The identifier to quote.

        Returns:
            The quoted identifier.
        """
        quote = self.identifier_quote
        parts = []
        for part in str(identifier).split("."):
            if part == "*":
                parts.append(part)
            else:
                parts.append(quote + part.replace(quote, quote * 2) + quote)
        return ".".join(parts)

    def quote(self, value: Any) -> str:
        """
        Quote a value as an SQL literal.

        Args:
            value: The value to quote.

        Returns:
            The SQL literal (e.g. `NULL`, `1`, `'O''Brien'`).

        Raises:
            InvalidArgumentError: If `value` is a NaN or infinite number.
        """
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, (float, Decimal)) and not math.isfinite(value):
            raise InvalidArgumentError(f"Cannot quote non-finite number {value!r} as an SQL literal")
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, datetime):
            value = value.strftime("%Y-%m-%d %H:%M:%S")
        elif isinstance(value, (date, time)):
            value = value.isoformat()
        elif isinstance(value, bytes):
            value = value.decode("utf-8")
        return "'" + self._escape_string(str(value)) + "'"

    def _escape_string(self, value: str) -> str:
        """Escape a string for use inside single quotes."""
        return value.replace("'", "''")

    @staticmethod
    def _where_items(where: WhereSpec) -> List[Tuple[str, Any]]:
        if isinstance(where, Mapping):
            return list(where.items())
        return list(where)

    def _where_sql(self, where: WhereSpec) -> Tuple[str, List[Any]]:
        conditions = []
        params = []
        for column, value in self._where_items(where):
            if value is None:
                conditions.append(f"{self.quote_identifier(column)} IS NULL")
            else:
                conditions.append(f"{self.quote_identifier(column)} = ?")
                params.append(value)
        return " AND ".join(conditions), params

    def insert(self, table: str, data: Mapping[str, Any]) -> int:
        """
        Insert a row.

        Args:
            table: The table name.
            data: Column values of the new row.

        Returns:
            The number of inserted rows.
        """
        columns = ", ".join(self.quote_identifier(column) for column in data)
        placeholders = ", ".join("?" for _ in data)
        sql = f"INSERT INTO {self.quote_identifier(table)} ({columns}) VALUES ({placeholders})"
        return self.execute(sql, list(data.values()))

    def update(self, table: str, data: Mapping[str, Any], where: WhereSpec) -> int:
        """
        Update the rows matching `where`.

        Args:
            table: The table name.
            data: The new column values.
            where: Column values identifying the rows (a mapping or a list of pairs).

        Returns:
            The number of updated rows.
        """
        set_str = ", ".join(f"{self.quote_identifier(column)} = ?" for column in data)
        where_str, where_params = self._where_sql(where)
        sql = f"UPDATE {self.quote_identifier(table)} SET {set_str} WHERE {where_str}"
        return self.execute(sql, list(data.values()) + where_params)

    def delete(self, table: str, where: WhereSpec) -> int:
        """
        Delete the rows matching `where`.

        Args:
            table: The table name.
            where: Column values identifying the rows (a mapping or a list of pairs).

        Returns:
            The number of deleted rows.
        """
        where_str, where_params = self._where_sql(where)
        sql = f"DELETE FROM {self.quote_identifier(table)} WHERE {where_str}"
        return self.execute(sql, where_params)

    def fetch_assoc(self, sql: str, params: Sequence[Any] = None) -> Optional[Dict[str, Any]]:
        """
        Fetch the first row of a query.

        Args:
            sql: The SELECT statement.
            params: Values for the placeholders.

        Returns:
            The first row as a dictionary, or None if there is none.
        """
        rows = self.fetch_all(sql, params)
        return rows[0] if rows else None

    def fetch_col(self, sql: str, params: Sequence[Any] = None) -> List[Any]:
        """
        Fetch the first column of every row of a query.

        Args:
            sql: The SELECT statement.
            params: Values for the placeholders.

        Returns:
            The values of the first column.
        """
        return [next(iter(row.values())) for row in self.fetch_all(sql, params) if row]

    def fetch_single_value(self, sql: str, params: Sequence[Any] = None) -> Any:
        """
        Fetch the first column of the first row of a query.

        Args:
            sql: The SELECT statement.
            params: Values for the placeholders.

        Returns:
            The value, or None if the query returned no rows.
        """
        row = self.fetch_assoc(sql, params)
        if not row:
            return None
        return next(iter(row.values()))

    @contextmanager
    def transaction(self) -> Generator["Connection", None, None]:
        """
        Run the enclosed block in a transaction. The transaction is committed
        when the block completes and rolled back if it raises; the exception
        is re-raised. Transactions do not nest.

        Yields:
            This connection.
        """
        self.begin_transaction()
        try:
            yield self
        except BaseException:
            LOG.debug("Rolling back transaction.")
            self.rollback()
            raise
        self.commit()
