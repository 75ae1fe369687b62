##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Tests for the `connections/sqlite_connection.py` and `connections/dbapi_connection.py` modules.
"""

import os
import sys

import pytest
from pytest_mock import MockerFixture

from entitydao.connections.dbapi_connection import DBAPIConnection
from entitydao.connections.sqlite_connection import SQLiteConnection


class TestSQLiteConnection:
    """
    Tests for the `SQLiteConnection` class.
    """

    def test_connect_creates_parent_directories(self, tmp_path):
        """
        Test that a file database is created together with its parent directories.

        Args:
            tmp_path: A built-in fixture from the pytest library that creates a temporary directory.
        """
        db_path = tmp_path / "nested" / "dir" / "app.db"
        with SQLiteConnection(str(db_path)) as db:
            assert db.platform == "sqlite"
            assert db.fetch_single_value("PRAGMA foreign_keys") == 1
        assert os.path.exists(db_path)

    def test_connect_settings(self, mocker: MockerFixture):
        """
        Test that the connection is opened in autocommit mode with WAL and foreign keys enabled.

        Args:
            mocker: PyTest mocker fixture.
        """
        mock_connect = mocker.patch("entitydao.connections.sqlite_connection.sqlite3.connect")
        SQLiteConnection()

        expected_kwargs = {"check_same_thread": False}
        if sys.version_info < (3, 12):
            expected_kwargs["isolation_level"] = None
        else:
            expected_kwargs["autocommit"] = True
        mock_connect.assert_called_once_with(":memory:", **expected_kwargs)
        mock_connect.return_value.execute.assert_any_call("PRAGMA journal_mode=WAL")
        mock_connect.return_value.execute.assert_any_call("PRAGMA foreign_keys=ON")

    def test_insert_and_fetch(self, sqlite_db: SQLiteConnection):
        """
        Test a round trip through an in-memory database.

        Args:
            sqlite_db: The in-memory SQLite database.
        """
        assert sqlite_db.insert("tags", {"name": "blue"}) == 1
        assert sqlite_db.last_insert_id() == 1
        assert sqlite_db.fetch_all('SELECT * FROM "tags"') == [{"id": 1, "name": "blue"}]
        assert sqlite_db.fetch_single_value('SELECT name FROM "tags" WHERE id = ?', [1]) == "blue"

    def test_list_columns(self, sqlite_db: SQLiteConnection):
        """
        Test that the columns of a table are listed in table order.

        Args:
            sqlite_db: The in-memory SQLite database.
        """
        assert sqlite_db.list_columns("memberships") == ["group_id", "user_id", "role"]

    def test_transaction_rollback(self, sqlite_db: SQLiteConnection):
        """
        Test that changes made inside a failed transaction are discarded.

        Args:
            sqlite_db: The in-memory SQLite database.
        """
        sqlite_db.insert("tags", {"name": "kept"})
        with pytest.raises(RuntimeError):
            with sqlite_db.transaction():
                sqlite_db.insert("tags", {"name": "discarded"})
                raise RuntimeError("abort")
        assert sqlite_db.fetch_col('SELECT name FROM "tags"') == ["kept"]

    def test_transaction_commit(self, sqlite_db: SQLiteConnection):
        """
        Test that changes made inside a successful transaction are kept.

        Args:
            sqlite_db: The in-memory SQLite database.
        """
        with sqlite_db.transaction():
            sqlite_db.insert("tags", {"name": "first"})
            sqlite_db.insert("tags", {"name": "second"})
        assert sqlite_db.fetch_col('SELECT name FROM "tags" ORDER BY id') == ["first", "second"]

    def test_close(self, sqlite_db: SQLiteConnection):
        """
        Test that closing twice is harmless.

        Args:
            sqlite_db: The in-memory SQLite database.
        """
        sqlite_db.close()
        sqlite_db.close()
        assert sqlite_db.conn is None


class TestDBAPIConnection:
    """
    Tests for the `DBAPIConnection` class with a mocked driver.
    """

    def test_format_paramstyle(self, mocker: MockerFixture):
        """
        Test that `?` placeholders are translated for "format" drivers.

        Args:
            mocker: PyTest mocker fixture.
        """
        driver_conn = mocker.MagicMock()
        cursor = driver_conn.cursor.return_value
        cursor.rowcount = 1
        db = DBAPIConnection(driver_conn, platform="MySQL", paramstyle="format", identifier_quote="`")

        db.update("users", {"status": "active"}, {"id": 5})

        cursor.execute.assert_called_once_with("UPDATE `users` SET `status` = %s WHERE `id` = %s", ("active", 5))
        cursor.close.assert_called_once()
        assert db.platform == "mysql"

    def test_fetch_all_uses_description(self, mocker: MockerFixture):
        """
        Test that rows are converted into dictionaries using the cursor description.

        Args:
            mocker: PyTest mocker fixture.
        """
        driver_conn = mocker.MagicMock()
        cursor = driver_conn.cursor.return_value
        cursor.description = [("id",), ("name",)]
        cursor.fetchall.return_value = [(1, "blue"), (2, "green")]
        db = DBAPIConnection(driver_conn, platform="sqlite")

        assert db.fetch_all("SELECT id, name FROM tags") == [{"id": 1, "name": "blue"}, {"id": 2, "name": "green"}]
        cursor.execute.assert_called_once_with("SELECT id, name FROM tags")

    def test_last_insert_id_with_sequence(self, mocker: MockerFixture):
        """
        Test that a sequence name makes `last_insert_id` query the sequence.

        Args:
            mocker: PyTest mocker fixture.
        """
        driver_conn = mocker.MagicMock()
        db = DBAPIConnection(driver_conn, platform="postgres")
        mock_fetch = mocker.patch.object(db, "fetch_single_value", return_value=12)

        assert db.last_insert_id("users_id_seq") == 12
        mock_fetch.assert_called_once_with("SELECT CURRVAL('users_id_seq')")

    def test_unsupported_paramstyle(self, mocker: MockerFixture):
        """
        Test that an unsupported paramstyle is rejected.

        Args:
            mocker: PyTest mocker fixture.
        """
        with pytest.raises(ValueError, match="Unsupported paramstyle 'named'"):
            DBAPIConnection(mocker.MagicMock(), platform="sqlite", paramstyle="named")
