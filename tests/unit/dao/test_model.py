##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Tests for the `dao/model.py` module.
"""

from typing import Callable

import pytest
from pytest_mock import MockerFixture

from entitydao.connections.connection import Connection
from entitydao.dao.model import Model
from entitydao.dao.registry import EntityRegistry
from entitydao.exceptions import IllegalStateError
from tests.sample_entities import TagDao, UserDao


class UserModel(Model):
    """A model working on users."""

    dao_name = "user"

    def rename(self, name: str) -> "UserModel":
        user = self.get_dao()
        user.name = name
        user.update()
        return self


class TagModel(Model):
    """A model working on tags."""

    dao_name = "tag"


@pytest.fixture
def registry(mocker: MockerFixture) -> EntityRegistry:
    """
    A registry holding the user and tag entities.

    Args:
        mocker: PyTest mocker fixture.

    Returns:
        An `EntityRegistry` instance.
    """
    mocker.patch("entitydao.abstracts.factory.entry_points", return_value=[])
    registry = EntityRegistry()
    registry.register("user", UserDao)
    registry.register("tag", TagDao)
    return registry


class TestModel:
    """
    Tests for the `Model` class.
    """

    def test_get_dao_creates_entity_once(self, sqlite_db: Connection, registry: EntityRegistry):
        """
        Test that the main entity is created from the registry on first use.

        Args:
            sqlite_db: The in-memory SQLite database.
            registry: An `EntityRegistry` instance.
        """
        model = UserModel(sqlite_db, registry=registry)
        dao = model.get_dao()
        assert isinstance(dao, UserDao)
        assert dao.db is sqlite_db
        assert model.get_dao() is dao

    def test_set_and_reset_dao(self, sqlite_db: Connection, registry: EntityRegistry):
        """
        Test that the main entity can be replaced.

        Args:
            sqlite_db: The in-memory SQLite database.
            registry: An `EntityRegistry` instance.
        """
        user = UserDao(sqlite_db).set_data({"id": 1})
        model = UserModel(sqlite_db, registry=registry).set_dao(user)
        assert model.get_dao() is user

        model.reset_dao()
        assert model.get_dao() is not user
        assert not model.get_dao().has_id()

    def test_dao_factory(self, sqlite_db: Connection, registry: EntityRegistry):
        """
        Test that other entities can be created by tag.

        Args:
            sqlite_db: The in-memory SQLite database.
            registry: An `EntityRegistry` instance.
        """
        assert isinstance(UserModel(sqlite_db, registry=registry).dao_factory("tag"), TagDao)

    def test_dao_factory_without_name(self, sqlite_db: Connection, registry: EntityRegistry):
        """
        Test that a model without `dao_name` can not create its main entity.

        Args:
            sqlite_db: The in-memory SQLite database.
            registry: An `EntityRegistry` instance.
        """
        with pytest.raises(IllegalStateError, match="requires a DAO name"):
            Model(sqlite_db, registry=registry).get_dao()

    def test_no_connection(self, registry: EntityRegistry):
        """
        Test that a model without connection can not create entities.

        Args:
            registry: An `EntityRegistry` instance.
        """
        with pytest.raises(IllegalStateError, match="No database connection set for UserModel"):
            UserModel(None, registry=registry).get_dao()

    def test_create_model(self, sqlite_db: Connection, registry: EntityRegistry):
        """
        Test that created models share the connection and registry.

        Args:
            sqlite_db: The in-memory SQLite database.
            registry: An `EntityRegistry` instance.
        """
        tag = TagDao(sqlite_db)
        tag_model = UserModel(sqlite_db, registry=registry).create_model(TagModel, tag)
        assert isinstance(tag_model, TagModel)
        assert tag_model.db is sqlite_db
        assert tag_model.registry is registry
        assert tag_model.get_dao() is tag

    @pytest.mark.parametrize(
        "model_class, expected",
        [
            (UserModel, "User"),
            (TagModel, "Tag"),
            (Model, "Model"),
        ],
    )
    def test_get_model_name(self, model_class, expected: str):
        """
        Test that the model name is the class name without the "Model" suffix.

        Args:
            model_class: The model class.
            expected: The expected model name.
        """
        assert model_class.get_model_name() == expected

    @pytest.mark.usefixtures("frozen_now")
    def test_transactional_commit(self, sqlite_db: Connection, registry: EntityRegistry, seed_users: Callable):
        """
        Test that the changes of a successful function are committed.

        Args:
            sqlite_db: The in-memory SQLite database.
            registry: An `EntityRegistry` instance.
            seed_users: A function inserting users.
        """
        seed_users(1)
        model = UserModel(sqlite_db, UserDao(sqlite_db).find(1), registry=registry)
        assert model.transactional(lambda m: m.rename("jane")) is model
        assert UserDao(sqlite_db).find(1).name == "jane"

    @pytest.mark.usefixtures("frozen_now")
    def test_transactional_rollback(self, sqlite_db: Connection, registry: EntityRegistry, seed_users: Callable):
        """
        Test that the changes of a failing function are rolled back and the error re-raised.

        Args:
            sqlite_db: The in-memory SQLite database.
            registry: An `EntityRegistry` instance.
            seed_users: A function inserting users.
        """
        seed_users(1)
        model = UserModel(sqlite_db, UserDao(sqlite_db).find(1), registry=registry)

        def rename_then_fail(m: UserModel):
            m.rename("jane")
            raise RuntimeError("validation failed")

        with pytest.raises(RuntimeError, match="validation failed"):
            model.transactional(rename_then_fail)
        assert UserDao(sqlite_db).find(1).name == "user01"
