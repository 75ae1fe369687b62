##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
The `connections` package contains the database connections used by DAOs.

Modules:
    connection: The abstract `Connection` interface.
    dbapi_connection: `DBAPIConnection`, a `Connection` over any DB-API 2.0 driver.
    sqlite_connection: `SQLiteConnection`, based on the standard library `sqlite3`.
    mysql_connection: `MySQLConnection`, based on `MySQLdb`.
    connection_factory: `ConnectionFactory` and the shared `connection_factory` instance.
"""

from entitydao.connections.connection import Connection
from entitydao.connections.dbapi_connection import DBAPIConnection
from entitydao.connections.mysql_connection import MySQLConnection
from entitydao.connections.sqlite_connection import SQLiteConnection


__all__ = ["Connection", "DBAPIConnection", "MySQLConnection", "SQLiteConnection"]
