##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Entity registry mapping entity tags to entity classes.

Applications register their entity classes under short tags (e.g. "user"),
either explicitly, with the `entity` decorator, or through the
`entitydao.entities` entry point group. The CLI and `Model` use the registry
to create entities by tag.
"""

import importlib
import logging
from typing import Any, Callable, Iterable, List, Type

from entitydao.abstracts import BaseFactory
from entitydao.connections.connection import Connection
from entitydao.dao.entity_dao import EntityDao
from entitydao.exceptions import EntityNotRegisteredError


LOG = logging.getLogger(__name__)


class EntityRegistry(BaseFactory):
    """
    Factory class for registering and instantiating entity classes by tag.

    Attributes:
        _registry (Dict[str, EntityDao]): Maps entity tags to entity classes.
        _aliases (Dict[str, str]): Maps alternate tags to canonical tags.

    Methods:
        entity: Class decorator registering an entity class under a tag.
        create_entity: Instantiate an entity class with a connection.
        import_modules: Import modules so that their entity classes get registered.
    """

    def _register_builtins(self):
        """
        There are no built-in entities; applications register their own.
        """

    def _validate_component(self, component_class: Any):
        """
        Ensure registered component is a subclass of EntityDao.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If the component does not subclass EntityDao.
        """
        if not isinstance(component_class, type) or not issubclass(component_class, EntityDao):
            raise TypeError(f"{component_class} must inherit from EntityDao")

    def _entry_point_group(self) -> str:
        """
        Entry point group used for discovering entity plugins.

        Returns:
            The entry point namespace for entitydao entities.
        """
        return "entitydao.entities"

    def _raise_component_error_class(self, msg: str) -> Type[Exception]:
        """
        Raise `EntityNotRegisteredError` for unknown tags.

        Args:
            msg: The message to add to the error being raised.
        """
        raise EntityNotRegisteredError(msg)

    def entity(self, tag: str, aliases: List[str] = None) -> Callable[[Type[EntityDao]], Type[EntityDao]]:
        """
        Class decorator registering an entity class under `tag`.

        Args:
            tag: The canonical tag.
            aliases: Optional alternative tags.

        Returns:
            The decorator; it returns the class unchanged.
        """

        def decorator(entity_class: Type[EntityDao]) -> Type[EntityDao]:
            self.register(tag, entity_class, aliases=aliases)
            return entity_class

        return decorator

    def create_entity(self, tag: str, db: Connection) -> EntityDao:
        """
        Instantiate the entity class registered under `tag`.

        Args:
            tag: The tag or alias of the entity class.
            db: The connection for the new entity.

        Returns:
            An empty entity.

        Raises:
            EntityNotRegisteredError: If no class is registered under `tag`.
        """
        return self.get_class(tag)(db)

    def import_modules(self, modules: Iterable[str]):
        """
        Import modules so that the entity classes they register become available.

        Args:
            modules: Dotted module names.
        """
        for module in modules:
            LOG.debug(f"Importing entity module '{module}'")
            importlib.import_module(module)


entity_registry = EntityRegistry()
