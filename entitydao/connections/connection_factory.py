##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Connection factory for selecting and instantiating database connections.

This module defines the `ConnectionFactory` class, which maps driver names
(as used in the `database.driver` configuration setting) to `Connection`
implementations and raises a clear error if an unsupported driver is requested.
"""

from typing import Any, Type

from entitydao.abstracts import BaseFactory
from entitydao.connections.connection import Connection
from entitydao.connections.mysql_connection import MySQLConnection
from entitydao.connections.sqlite_connection import SQLiteConnection
from entitydao.exceptions import ConnectionNotSupportedError


class ConnectionFactory(BaseFactory):
    """
    Factory class for managing and instantiating supported connections.

    Attributes:
        _registry (Dict[str, Connection]): Maps canonical driver names to connection classes.
        _aliases (Dict[str, str]): Maps alternate names to canonical driver names.

    Methods:
        register: Register a new connection class and optional aliases.
        list_available: Return a list of supported driver names.
        create: Instantiate a connection class by name or alias.
        get_component_info: Return metadata about a registered connection class.
    """

    def _register_builtins(self):
        """
        Register built-in connection implementations.
        """
        self.register("sqlite", SQLiteConnection, aliases=["sqlite3"])
        self.register("mysql", MySQLConnection, aliases=["mariadb"])

    def _validate_component(self, component_class: Any):
        """
        Ensure registered component is a subclass of Connection.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If the component does not subclass Connection.
        """
        if not issubclass(component_class, Connection):
            raise TypeError(f"{component_class} must inherit from Connection")

    def _entry_point_group(self) -> str:
        """
        Entry point group used for discovering connection plugins.

        Returns:
            The entry point namespace for entitydao connection plugins.
        """
        return "entitydao.connections"

    def _raise_component_error_class(self, msg: str) -> Type[Exception]:
        """
        Raise `ConnectionNotSupportedError` for unsupported drivers.

        Args:
            msg: The message to add to the error being raised.
        """
        raise ConnectionNotSupportedError(msg)


connection_factory = ConnectionFactory()
