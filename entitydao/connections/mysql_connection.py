##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
MySQL/MariaDB connection for entitydao, based on the `MySQLdb` driver
(installed with the `mysql` extra: `pip install entitydao[mysql]`).
"""

import logging
import os
from typing import Any, List

from entitydao.connections.dbapi_connection import DBAPIConnection


LOG = logging.getLogger(__name__)


def get_password(password: str) -> str:
    """
    Resolve a configured password. If `password` names an existing file, the
    first line of that file is the password; otherwise `password` is the
    password itself.

    Args:
        password: A password or the path to a password file.

    Returns:
        The password.
    """
    if not password:
        return ""
    password_file = os.path.expanduser(password)
    if os.path.isfile(password_file):
        with open(password_file, "r") as f:  # pylint: disable=C0103
            LOG.debug("Password resolution: using file.")
            return f.readline().strip()
    LOG.debug("Password resolution: using direct value.")
    return password


class MySQLConnection(DBAPIConnection):
    """
    Connection to a MySQL or MariaDB server.

    Identifiers are quoted with backticks and backslashes in string literals
    are escaped, as the server interprets them by default.
    """

    def __init__(  # pylint: disable=R0913
        self,
        host: str = "localhost",
        port: int = 3306,
        user: str = None,
        password: str = None,
        name: str = None,
        platform: str = "mysql",
        conn: Any = None,
    ):
        """
        Connect to a MySQL server, or wrap an existing `MySQLdb` connection.

        Args:
            host: Server host name.
            port: Server port.
            user: User name.
            password: Password, or path to a file holding the password.
            name: Database (schema) name.
            platform: "mysql" or "mariadb".
            conn: An already open driver connection; when given, no new connection is made.
                Either way the connection is switched to autocommit mode.
        """
        if conn is None:
            import MySQLdb  # pylint: disable=import-outside-toplevel

            connect_kwargs = {"host": host, "port": int(port), "charset": "utf8mb4"}
            if user:
                connect_kwargs["user"] = user
            if password:
                connect_kwargs["passwd"] = get_password(password)
            if name:
                connect_kwargs["db"] = name
            conn = MySQLdb.connect(**connect_kwargs)
            LOG.info(f"Connected to {platform} server at {host}:{port}")

        # Statements outside begin_transaction are committed one by one
        conn.autocommit(True)
        super().__init__(conn, platform=platform, paramstyle="format", identifier_quote="`")

    def _escape_string(self, value: str) -> str:
        return value.replace("\\", "\\\\").replace("'", "''")

    def list_columns(self, table: str) -> List[str]:
        rows = self.fetch_all(f"SHOW COLUMNS FROM {self.quote_identifier(table)}")
        return [row["Field"] for row in rows]

    def begin_transaction(self):
        LOG.debug("Beginning transaction.")
        self.execute("START TRANSACTION")
