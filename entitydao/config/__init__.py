##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Used to store the application configuration.

The `config` package loads the `entitydao.yaml` file that tells the CLI (and
any application that wants it) which database to connect to, how to log and
which modules define the entities to register.

Modules:
    config_filepaths.py: Constants for the locations of configuration files.
    configfile.py: Locates, loads and defaults the configuration file.
"""
from copy import copy
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from entitydao.utils import nested_dict_to_namespaces


class Config:
    """
    The Config class, meant to store all entitydao config settings in one place.

    Attributes:
        database (Optional[SimpleNamespace]): Connection settings (`driver`, `path`, `host`, ...).
        logging (Optional[SimpleNamespace]): Logging settings (`level`, `colors`).
        entities (List[str]): Modules to import so that their entities get registered.

    Methods:
        __copy__: Creates a shallow copy of the Config instance.
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the provided configuration dictionary into namespaces
            and assigns them to the Config instance's attributes.
        get_connection_settings: Returns the driver name and keyword arguments for its connection class.
    """

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary containing configuration data. The "database" and
                "logging" sections become `SimpleNamespace` attributes and "entities"
                is kept as a list of module names.
        """
        self.database: Optional[SimpleNamespace] = None
        self.logging: Optional[SimpleNamespace] = None
        self.entities: List[str] = []
        self.load_app_into_namespaces(app_dict)

    def __copy__(self) -> "Config":
        """
        Creates a shallow copy of the Config instance.

        Returns:
            A new Config instance with copied `database`, `logging` and `entities` attributes.
        """
        cls = self.__class__
        result = cls.__new__(cls)
        copied_attrs = {
            "database": copy(self.__dict__["database"]),
            "logging": copy(self.__dict__["logging"]),
            "entities": list(self.__dict__["entities"]),
        }
        result.__dict__.update(copied_attrs)
        return result

    def __str__(self) -> str:
        formatted_str = "config:"
        attrs = {"database": self.database, "logging": self.logging}
        for name, attr in attrs.items():
            if attr is not None:
                items = (f"    {k}: {v!r}" for k, v in attr.__dict__.items() if k != "password")
                joined_items = "\n".join(items)
                formatted_str += f"\n  {name}:\n{joined_items}"
            else:
                formatted_str += f"\n  {name}:\n    None"
        formatted_str += f"\n  entities: {self.entities!r}"
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for field in ("database", "logging"):
            try:
                setattr(self, field, nested_dict_to_namespaces(app_dict[field]))
            except KeyError:
                # The sections are optional
                pass
        self.entities = list(app_dict.get("entities") or [])

    def get_connection_settings(self) -> Dict[str, Any]:
        """
        Returns the settings needed to create a connection with `connection_factory`.

        Returns:
            A dictionary with the keys "driver" (the driver name) and "config"
            (keyword arguments for the connection class).
        """
        settings = dict(vars(self.database)) if self.database is not None else {}
        driver = settings.pop("driver", "sqlite")
        if driver in ("sqlite", "sqlite3"):
            connection_config = {"db_path": settings.get("path", ":memory:")}
        else:
            connection_config = {
                key: settings[key] for key in ("host", "port", "user", "password", "name") if key in settings
            }
            if driver == "mariadb":
                connection_config["platform"] = "mariadb"
        return {"driver": driver, "config": connection_config}
