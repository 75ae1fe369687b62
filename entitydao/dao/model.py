##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
This module defines `Model`, the base class for business models.

A model holds business logic on top of one main entity (its DAO). The entity
is created from the entity registry by tag, using the model's connection.
"""

import logging
from typing import Callable, Optional, Type, TypeVar

from entitydao.connections.connection import Connection
from entitydao.dao.entity_dao import EntityDao
from entitydao.dao.registry import EntityRegistry, entity_registry
from entitydao.exceptions import IllegalStateError


LOG = logging.getLogger(__name__)

M = TypeVar("M", bound="Model")


class Model:
    """
    Base class for business models.

    Class attributes:
        dao_name (str): Registry tag of the model's main entity.

    Attributes:
        registry (EntityRegistry): The registry used to create entities.

    Methods:
        dao_factory: Create an entity by tag.
        get_dao: Return the main entity, creating it on first use.
        set_dao: Replace the main entity.
        reset_dao: Replace the main entity with a new, empty one.
        create_model: Create another model sharing this model's connection.
        get_model_name: Return the class name without the "Model" suffix.
        transactional: Run a function in a transaction.
    """

    dao_name: str = ""

    def __init__(self, db: Connection, dao: Optional[EntityDao] = None, registry: Optional[EntityRegistry] = None):
        """
        Args:
            db: The connection used by this model and its entities.
            dao: An entity to initialize the model with.
            registry: The registry used to create entities; defaults to `entity_registry`.
        """
        self._db: Optional[Connection] = db
        self._dao: Optional[EntityDao] = dao
        self.registry: EntityRegistry = registry if registry is not None else entity_registry

    @property
    def db(self) -> Connection:
        """
        The connection of this model.

        Raises:
            IllegalStateError: If no connection was set.
        """
        if self._db is None:
            raise IllegalStateError(f"No database connection set for {type(self).__name__}")
        return self._db

    def dao_factory(self, name: str = "") -> EntityDao:
        """
        Create an empty entity.

        Args:
            name: Registry tag of the entity; defaults to `dao_name`.

        Returns:
            The entity, using this model's connection.

        Raises:
            IllegalStateError: If neither `name` nor `dao_name` is set.
            EntityNotRegisteredError: If the tag is not registered.
        """
        tag = name or self.dao_name
        if not tag:
            raise IllegalStateError("The DAO factory requires a DAO name")
        return self.registry.create_entity(tag, self.db)

    def get_dao(self) -> EntityDao:
        """Returns the main entity, creating an empty one on first use."""
        if self._dao is None:
            self._dao = self.dao_factory()
        return self._dao

    def set_dao(self, dao: EntityDao) -> "Model":
        """Replace the main entity."""
        self._dao = dao
        return self

    def reset_dao(self) -> "Model":
        """Replace the main entity with a new, empty one."""
        self._dao = self.dao_factory()
        return self

    def create_model(self, model_class: Type[M], dao: Optional[EntityDao] = None) -> M:
        """
        Create another model that shares this model's connection and registry.

        Args:
            model_class: The class of the new model.
            dao: An entity to initialize the new model with.

        Returns:
            The new model.
        """
        return model_class(self.db, dao, registry=self.registry)

    @classmethod
    def get_model_name(cls) -> str:
        """Returns the class name without the "Model" suffix (e.g. `UserModel` -> `User`)."""
        name = cls.__name__
        if name.endswith("Model") and name != "Model":
            return name[: -len("Model")]
        return name

    def transactional(self, func: Callable[["Model"], None]) -> "Model":
        """
        Run `func(self)` in a transaction on the main entity's connection. The
        transaction is rolled back and the error re-raised if `func` or the
        commit fails.

        Args:
            func: The function to run; it receives this model.

        Returns:
            This model.
        """
        dao = self.get_dao()
        dao.begin_transaction()
        try:
            func(self)
            dao.commit()
        except Exception:
            LOG.debug(f"Rolling back transaction of {type(self).__name__}")
            dao.rollback()
            raise
        return self
