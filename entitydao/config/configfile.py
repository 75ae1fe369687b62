##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
This module provides functionality for locating and loading the entitydao
configuration file (`entitydao.yaml`) and for filling in default settings.
"""
import logging
import os
from typing import Dict, Optional

from entitydao.config import Config
from entitydao.config.config_filepaths import APP_FILENAME, DEFAULT_DB_PATH, ENTITYDAO_HOME
from entitydao.utils import load_yaml


LOG: logging.Logger = logging.getLogger(__name__)


def load_config(filepath: str) -> Optional[Dict]:
    """
    Reads an entitydao YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath: The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath) or {}


def find_config_file(path: str = None) -> Optional[str]:
    """
    Locate the entitydao configuration file (`entitydao.yaml`).

    If `path` is given it may name the file itself or the directory holding
    it, and only that location is checked. Otherwise the search order is:
      1. `entitydao.yaml` in the current working directory.
      2. `entitydao.yaml` in the `ENTITYDAO_HOME` directory.

    Args:
        path: A specific file or directory to look for `entitydao.yaml`.

    Returns:
        The full path to the configuration file if found, otherwise `None`.
    """
    if path is None:
        local_app = os.path.join(os.getcwd(), APP_FILENAME)
        if os.path.isfile(local_app):
            return local_app

        path_app = os.path.join(ENTITYDAO_HOME, APP_FILENAME)
        if os.path.isfile(path_app):
            return path_app

        return None

    path = os.path.expanduser(path)
    if os.path.isfile(path):
        return path

    app_path = os.path.join(path, APP_FILENAME)
    if os.path.isfile(app_path):
        return app_path

    return None


def get_default_config() -> Dict:
    """
    Creates the default configuration: a SQLite database in `ENTITYDAO_HOME`.

    Returns:
        A configuration dictionary with essential default values.
    """
    return {
        "database": {"driver": "sqlite", "path": DEFAULT_DB_PATH},
        "logging": {"level": "INFO", "colors": True},
        "entities": [],
    }


def load_defaults(config: Dict):
    """
    Fill in every setting missing from `config` with its default value.

    Args:
        config: The configuration dictionary to be updated with default values.
    """
    defaults = get_default_config()
    for section in ("database", "logging"):
        if not isinstance(config.get(section), dict):
            config[section] = {}
        for key, value in defaults[section].items():
            # A mysql section must not inherit the sqlite database path
            if section == "database" and key == "path" and config[section].get("driver", "sqlite") != "sqlite":
                continue
            config[section].setdefault(key, value)
    if not config.get("entities"):
        config["entities"] = []


def get_config(path: Optional[str] = None) -> Dict:
    """
    Loads an entitydao configuration file and returns a dictionary containing the configuration data.

    Args:
        path: The file or directory to look for the configuration file.
            If `None`, default search paths are used.

    Returns:
        A dictionary containing all the configuration data.

    Raises:
        ValueError: If an explicit `path` was given but no configuration file exists there.
    """
    filepath = find_config_file(path)
    if filepath is None:
        if path is not None:
            raise ValueError(f"Cannot find an entitydao config file at '{path}'")
        LOG.debug("No config file found, using the default configuration")
        config = get_default_config()
    else:
        config = load_config(filepath)
    load_defaults(config)
    return config


def initialize_config(path: Optional[str] = None) -> Config:
    """
    Initializes and returns the entitydao configuration.

    Args:
        path: Path to look for the configuration file.

    Returns:
        The initialized configuration object.
    """
    return Config(get_config(path))
