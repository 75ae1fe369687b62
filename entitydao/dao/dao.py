##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
This module defines `Dao`, the base class of every data access object.

A `Dao` borrows a `Connection` from its caller and offers raw SQL access on
top of it: query builders, fetch helpers and transaction control. It never
opens, pools or closes the connection.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Generator, List, Optional, Sequence, Union

from entitydao.connections.connection import Connection
from entitydao.exceptions import IllegalStateError
from entitydao.query import QueryBuilder


LOG = logging.getLogger(__name__)

Statement = Union[str, QueryBuilder]


class Dao:
    """
    Raw SQL data access object.

    Attributes:
        db (Connection): The connection this DAO works with.

    Methods:
        set_db: Replace the connection.
        create_query_builder: Return a new, empty `QueryBuilder`.
        execute: Execute a statement.
        fetch_all: Fetch every row of a query.
        fetch_assoc: Fetch the first row of a query.
        fetch_col: Fetch the first column of every row of a query.
        fetch_single_value: Fetch the first column of the first row of a query.
        describe_table: Return the column names of a table.
        begin_transaction: Start a transaction.
        commit: Commit the current transaction.
        rollback: Roll back the current transaction.
        transaction: Context manager wrapping a block in a transaction.
        get_datetime_instance: Return the current time, or parse a datetime.
    """

    def __init__(self, db: Optional[Connection] = None):
        """
        Args:
            db: The connection to use. It can also be given later with `set_db`.
        """
        self._db: Optional[Connection] = db

    @property
    def db(self) -> Connection:
        """
        The connection this DAO works with.

        Raises:
            IllegalStateError: If no connection was set.
        """
        if self._db is None:
            raise IllegalStateError(f"No database connection set for {type(self).__name__}")
        return self._db

    def set_db(self, db: Connection) -> "Dao":
        """Replace the connection of this DAO."""
        self._db = db
        return self

    def create_query_builder(self) -> QueryBuilder:
        """Returns a new, empty query builder."""
        return QueryBuilder()

    def execute(self, sql: Statement, params: Sequence[Any] = None) -> int:
        """Execute a statement and return the number of affected rows."""
        return self.db.execute(str(sql), params)

    def fetch_all(self, sql: Statement, params: Sequence[Any] = None) -> List[Dict[str, Any]]:
        """Fetch every row of a query as dictionaries."""
        return self.db.fetch_all(str(sql), params)

    def fetch_assoc(self, sql: Statement, params: Sequence[Any] = None) -> Optional[Dict[str, Any]]:
        """Fetch the first row of a query, or None."""
        return self.db.fetch_assoc(str(sql), params)

    def fetch_col(self, sql: Statement, params: Sequence[Any] = None) -> List[Any]:
        """Fetch the first column of every row of a query."""
        return self.db.fetch_col(str(sql), params)

    def fetch_single_value(self, sql: Statement, params: Sequence[Any] = None) -> Any:
        """Fetch the first column of the first row of a query, or None."""
        return self.db.fetch_single_value(str(sql), params)

    def describe_table(self, table: str) -> List[str]:
        """
        Return the column names of a table.

        Args:
            table: The table name.

        Returns:
            The column names, in table order.
        """
        return self.db.list_columns(table)

    def begin_transaction(self):
        """Start a transaction on the connection."""
        self.db.begin_transaction()

    def commit(self):
        """Commit the current transaction."""
        self.db.commit()

    def rollback(self):
        """Roll back the current transaction."""
        self.db.rollback()

    @contextmanager
    def transaction(self) -> Generator["Dao", None, None]:
        """
        Run the enclosed block in a transaction that is committed on success
        and rolled back (re-raising the error) on failure.

        Yields:
            This DAO.
        """
        with self.db.transaction():
            yield self

    @staticmethod
    def get_datetime_instance(value: Union[str, datetime, None] = None) -> datetime:
        """
        Return a datetime for `value`, or the current local time (without
        microseconds) if `value` is None.

        Args:
            value: A datetime, an ISO 8601 string, or None.

        Returns:
            The datetime.
        """
        if value is None:
            return datetime.now().replace(microsecond=0)
        if isinstance(value, datetime):
            return value
        return datetime.fromisoformat(str(value))
