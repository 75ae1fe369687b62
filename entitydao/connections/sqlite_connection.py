##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
SQLite connection for entitydao.

This module defines the `SQLiteConnection` class, which opens a properly
configured SQLite database (WAL mode, foreign key support, autocommit) and
exposes it through the `Connection` interface. Transactions are explicit:
`begin_transaction` issues `BEGIN` and `commit`/`rollback` end it.
"""

import logging
import sqlite3
import sys
from pathlib import Path
from typing import List

from entitydao.connections.dbapi_connection import DBAPIConnection


LOG = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


class SQLiteConnection(DBAPIConnection):
    """
    Connection to a SQLite database file (or an in-memory database).

    The connection is configured with:
    - WAL mode for better concurrency
    - Foreign key constraint enforcement
    - Autocommit, so that transactions are only opened by `begin_transaction`

    Attributes:
        db_path (str): Path of the database file, or ":memory:".

    Methods:
        list_columns: Return the column names of a table.
        begin_transaction: Start a transaction.
        commit: Commit the current transaction.
        rollback: Roll back the current transaction.
    """

    def __init__(self, db_path: str = MEMORY_DB):
        """
        Open the SQLite database at `db_path`, creating parent directories as needed.

        Args:
            db_path: Path of the database file, or ":memory:".
        """
        self.db_path: str = str(db_path)
        super().__init__(self._connect(self.db_path), platform="sqlite", paramstyle="qmark")

    @staticmethod
    def _connect(db_path: str) -> sqlite3.Connection:
        if db_path != MEMORY_DB:
            db_path = str(Path(db_path).expanduser())
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        connection_kwargs = {"check_same_thread": False}
        if sys.version_info < (3, 12):  # Autocommit wasn't added until python 3.12
            connection_kwargs["isolation_level"] = None
        else:
            connection_kwargs["autocommit"] = True

        conn = sqlite3.connect(db_path, **connection_kwargs)

        # Enable WAL mode for better concurrent access
        conn.execute("PRAGMA journal_mode=WAL")
        # Enable foreign key constraints
        conn.execute("PRAGMA foreign_keys=ON")

        LOG.debug(f"Opened SQLite database at {db_path}")
        return conn

    def list_columns(self, table: str) -> List[str]:
        rows = self.fetch_all(f"PRAGMA table_info({self.quote_identifier(table)})")
        return [row["name"] for row in rows]

    def commit(self):
        LOG.debug("Committing transaction.")
        self.execute("COMMIT")

    def rollback(self):
        LOG.debug("Rolling back transaction.")
        self.execute("ROLLBACK")
