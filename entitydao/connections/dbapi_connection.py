##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Connection implementation for any PEP 249 (DB-API 2.0) driver connection.

`DBAPIConnection` adapts the `?` placeholders used throughout entitydao to the
driver's paramstyle and converts result rows into dictionaries using the
cursor description. Platform-specific subclasses (SQLite, MySQL) only have to
configure quoting, paramstyle and transaction handling.
"""

import logging
from types import TracebackType
from typing import Any, Dict, List, Optional, Sequence, Type

from entitydao.connections.connection import Connection


LOG = logging.getLogger(__name__)

PLACEHOLDERS = {
    "qmark": "?",
    "format": "%s",
    "pyformat": "%s",
}


class DBAPIConnection(Connection):
    """
    Connection wrapping a DB-API 2.0 driver connection.

    Attributes:
        conn (Any): The wrapped driver connection.
        platform (str): Lowercase name of the database platform.
        paramstyle (str): The driver's paramstyle ("qmark", "format" or "pyformat").

    Methods:
        execute: Execute a statement and return the number of affected rows.
        fetch_all: Fetch every row of a query as dictionaries.
        list_columns: Return the column names of a table.
        last_insert_id: Return the id generated by the last insert.
        begin_transaction: Start a transaction.
        commit: Commit the current transaction.
        rollback: Roll back the current transaction.
        close: Close the wrapped driver connection.
    """

    def __init__(self, conn: Any, platform: str, paramstyle: str = "qmark", identifier_quote: str = '"'):
        """
        Wrap a driver connection.

        Args:
            conn: An open DB-API 2.0 connection.
            platform: Name of the database platform (e.g. "sqlite", "mysql").
            paramstyle: The driver's paramstyle.
            identifier_quote: Character used to quote identifiers.
        """
        if paramstyle not in PLACEHOLDERS:
            raise ValueError(f"Unsupported paramstyle '{paramstyle}'. Supported: {', '.join(PLACEHOLDERS)}")
        self.conn = conn
        self.platform = platform.lower()
        self.paramstyle = paramstyle
        self.identifier_quote = identifier_quote
        self._last_row_id: Any = None

    def __enter__(self) -> "DBAPIConnection":
        return self

    def __exit__(self, exc_type: Type[Exception], exc_value: Exception, traceback: TracebackType):
        """
        Exits the runtime context and closes the driver connection.

        Args:
            exc_type: The exception type raised, if any.
            exc_value: The exception instance raised, if any.
            traceback: The traceback object, if an exception was raised.
        """
        self.close()

    def _prepare(self, sql: str, params: Optional[Sequence[Any]]) -> str:
        placeholder = PLACEHOLDERS[self.paramstyle]
        if params and placeholder != "?":
            return sql.replace("?", placeholder)
        return sql

    def _run(self, sql: str, params: Optional[Sequence[Any]]):
        LOG.debug(f"SQL: {sql}")
        if params:
            LOG.debug(f"SQL params: {params}")
        cursor = self.conn.cursor()
        if params:
            cursor.execute(self._prepare(sql, params), tuple(params))
        else:
            cursor.execute(sql)
        return cursor

    def execute(self, sql: str, params: Sequence[Any] = None) -> int:
        cursor = self._run(sql, params)
        try:
            self._last_row_id = getattr(cursor, "lastrowid", None)
            return cursor.rowcount
        finally:
            cursor.close()

    def fetch_all(self, sql: str, params: Sequence[Any] = None) -> List[Dict[str, Any]]:
        cursor = self._run(sql, params)
        try:
            columns = [column[0] for column in cursor.description or []]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def list_columns(self, table: str) -> List[str]:
        cursor = self._run(f"SELECT * FROM {self.quote_identifier(table)} WHERE 1 = 0", None)
        try:
            return [column[0] for column in cursor.description or []]
        finally:
            cursor.close()

    def last_insert_id(self, sequence: Optional[str] = None) -> Any:
        if sequence:
            return self.fetch_single_value(f"SELECT CURRVAL({self.quote(sequence)})")
        return self._last_row_id

    def begin_transaction(self):
        LOG.debug("Beginning transaction.")
        self.execute("BEGIN")

    def commit(self):
        LOG.debug("Committing transaction.")
        self.conn.commit()

    def rollback(self):
        LOG.debug("Rolling back transaction.")
        self.conn.rollback()

    def close(self):
        if self.conn is not None:
            self.conn.close()
            self.conn = None
