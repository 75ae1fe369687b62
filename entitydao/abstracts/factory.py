##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Shared base of the name-to-class registries of entitydao.

`BaseFactory` keeps classes under canonical names plus optional aliases,
loads third-party classes from an entry point group on first miss, and
instantiates or describes registered classes. `ConnectionFactory` (driver
names to `Connection` classes) and `EntityRegistry` (tags to `EntityDao`
classes) are built on it.
"""

import logging
from abc import ABC, abstractmethod
from importlib.metadata import entry_points
from typing import Any, Dict, List, Type


LOG = logging.getLogger(__name__)


class BaseFactory(ABC):
    """
    Abstract registry of pluggable classes.

    Subclasses register their built-in classes in `_register_builtins`,
    reject foreign classes in `_validate_component`, name their plugin
    namespace in `_entry_point_group` and may replace the lookup error by
    overriding `_raise_component_error_class`.

    Attributes:
        _registry (Dict[str, Any]): Canonical names mapped to classes.
        _aliases (Dict[str, str]): Aliases mapped to canonical names.

    Methods:
        register: Register a class under a name and optional aliases.
        list_available: Return every canonical name, plugins included.
        get_class: Return the class registered under a name or alias.
        create: Instantiate the class registered under a name or alias.
        get_component_info: Describe the class registered under a name or alias.
    """

    def __init__(self):
        self._registry: Dict[str, Any] = {}
        self._aliases: Dict[str, str] = {}
        self._plugins_discovered: bool = False
        self._register_builtins()

    @abstractmethod
    def _register_builtins(self):
        """Register the classes that ship with entitydao."""
        raise NotImplementedError("Subclasses of `BaseFactory` must implement a `_register_builtins` method.")

    @abstractmethod
    def _validate_component(self, component_class: Any):
        """
        Check a class before it is registered.

        Raises:
            TypeError: If `component_class` does not belong in this registry.
        """
        raise NotImplementedError("Subclasses of `BaseFactory` must implement a `_validate_component` method.")

    @abstractmethod
    def _entry_point_group(self) -> str:
        """Returns the entry point group searched for plugin classes."""
        raise NotImplementedError("Subclasses of `BaseFactory` must define an entry point group.")

    def _raise_component_error_class(self, msg: str) -> Type[Exception]:
        """
        Raise the error for a name that is not registered. Defaults to `ValueError`.

        Args:
            msg: The error message.
        """
        raise ValueError(msg)

    def _discover_plugins(self):
        """
        Register the classes of the entry point group. Runs once per registry;
        a plugin that cannot be loaded is logged and skipped.
        """
        if self._plugins_discovered:
            return
        self._plugins_discovered = True

        group = self._entry_point_group()
        for entry_point in entry_points(group=group):
            try:
                self.register(entry_point.name, entry_point.load())
            except Exception as e:  # pylint: disable=broad-exception-caught
                LOG.warning(f"Skipping plugin '{entry_point.name}' of group '{group}': {e}")
                continue
            LOG.info(f"Loaded plugin '{entry_point.name}' from group '{group}'")

    def _resolve(self, name: str) -> str:
        """Returns the canonical name for a name or alias."""
        return self._aliases.get(name, name)

    def register(self, name: str, component_class: Any, aliases: List[str] = None) -> None:
        """
        Register a class. Registering an existing name replaces its class.

        Args:
            name: Canonical name of the class.
            component_class: The class.
            aliases: Alternative names resolving to `name`.

        Raises:
            TypeError: If `_validate_component` rejects the class.
        """
        self._validate_component(component_class)
        self._registry[name] = component_class
        for alias in aliases or []:
            self._aliases[alias] = name
        LOG.debug(f"Registered '{name}' -> {component_class.__name__} (aliases: {aliases or []})")

    def list_available(self) -> List[str]:
        """Returns the canonical names of every registered class, plugins included."""
        self._discover_plugins()
        return list(self._registry)

    def get_class(self, component_type: str) -> Any:
        """
        Look up a registered class. Plugins are discovered on the first miss.

        Args:
            component_type: A canonical name or alias.

        Returns:
            The registered class.

        Raises:
            Exception: The error of `_raise_component_error_class` if nothing is
                registered under `component_type`.
        """
        canonical_name = self._resolve(component_type)
        if canonical_name not in self._registry:
            self._discover_plugins()

        if canonical_name not in self._registry:
            available = ", ".join(self.list_available())
            self._raise_component_error_class(
                f"Component '{component_type}' is not supported. Available components: {available}"
            )
        return self._registry[canonical_name]

    def create(self, component_type: str, config: Dict = None) -> Any:
        """
        Instantiate a registered class.

        Args:
            component_type: A canonical name or alias.
            config: Keyword arguments for the constructor.

        Returns:
            The new instance.

        Raises:
            ValueError: If the constructor fails.
        """
        component_class = self.get_class(component_type)
        canonical_name = self._resolve(component_type)
        try:
            instance = component_class(**(config or {}))
        except Exception as e:
            raise ValueError(f"Failed to create component '{canonical_name}': {e}") from e
        LOG.debug(f"Created component '{canonical_name}'")
        return instance

    def get_component_info(self, component_type: str) -> Dict:
        """
        Describe a registered class.

        Args:
            component_type: A canonical name or alias.

        Returns:
            The canonical name, class name, module and docstring of the class.
        """
        component_class = self.get_class(component_type)
        return {
            "name": self._resolve(component_type),
            "class": component_class.__name__,
            "module": component_class.__module__,
            "description": component_class.__doc__ or "No description available",
        }
