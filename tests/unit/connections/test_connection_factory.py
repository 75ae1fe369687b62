##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Tests for the `connections/connection_factory.py` module.
"""

import pytest
from pytest_mock import MockerFixture

from entitydao.connections.connection_factory import ConnectionFactory
from entitydao.connections.mysql_connection import MySQLConnection
from entitydao.connections.sqlite_connection import SQLiteConnection
from entitydao.exceptions import ConnectionNotSupportedError


@pytest.fixture
def factory(mocker: MockerFixture) -> ConnectionFactory:
    """
    A `ConnectionFactory` whose plugin discovery finds nothing.

    Args:
        mocker: PyTest mocker fixture.

    Returns:
        A `ConnectionFactory` instance.
    """
    mocker.patch("entitydao.abstracts.factory.entry_points", return_value=[])
    return ConnectionFactory()


class TestConnectionFactory:
    """
    Tests for the `ConnectionFactory` class.
    """

    def test_builtins(self, factory: ConnectionFactory):
        """
        Test that SQLite and MySQL are available out of the box.

        Args:
            factory: A `ConnectionFactory` instance.
        """
        assert factory.list_available() == ["sqlite", "mysql"]
        assert factory.get_class("sqlite3") is SQLiteConnection
        assert factory.get_class("mariadb") is MySQLConnection

    def test_create_sqlite(self, factory: ConnectionFactory):
        """
        Test that an in-memory SQLite connection can be created from settings.

        Args:
            factory: A `ConnectionFactory` instance.
        """
        db = factory.create("sqlite", {"db_path": ":memory:"})
        try:
            assert isinstance(db, SQLiteConnection)
            assert db.fetch_single_value("SELECT 1 AS one") == 1
        finally:
            db.close()

    def test_unsupported_driver(self, factory: ConnectionFactory):
        """
        Test that an unknown driver raises a `ConnectionNotSupportedError`.

        Args:
            factory: A `ConnectionFactory` instance.
        """
        with pytest.raises(ConnectionNotSupportedError, match="Component 'oracle' is not supported"):
            factory.create("oracle")

    def test_register_rejects_non_connections(self, factory: ConnectionFactory):
        """
        Test that only `Connection` subclasses can be registered.

        Args:
            factory: A `ConnectionFactory` instance.
        """
        with pytest.raises(TypeError, match="must inherit from Connection"):
            factory.register("bogus", object)
