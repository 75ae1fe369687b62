##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Utility functions to support entitydao CLI command handlers.

These helpers load the configuration named on the command line, open the
configured connection, register the configured entity modules and format
rows for the terminal.
"""

import logging
from argparse import Namespace
from contextlib import suppress
from typing import Any, Dict, List, Mapping, Optional, Sequence

from tabulate import tabulate

from entitydao.config import Config
from entitydao.config.configfile import initialize_config
from entitydao.connections.connection import Connection
from entitydao.connections.connection_factory import connection_factory
from entitydao.dao.entity_dao import EntityDao
from entitydao.dao.registry import entity_registry


LOG = logging.getLogger("entitydao")

NULL_VALUES = ("null", "NULL", "None")


def load_cli_config(args: Namespace) -> Config:
    """
    Load the configuration selected with `-c/--config` (or the default one)
    and import its entity modules.

    Args:
        args: Parsed CLI arguments.

    Returns:
        The configuration.
    """
    config = initialize_config(getattr(args, "config", None))
    LOG.debug(str(config))
    entity_registry.import_modules(config.entities)
    return config


def open_connection(config: Config) -> Connection:
    """
    Open the connection described by the `database` section of a configuration.

    Args:
        config: The configuration.

    Returns:
        The open connection.
    """
    settings = config.get_connection_settings()
    LOG.debug(f"Opening '{settings['driver']}' connection")
    return connection_factory.create(settings["driver"], settings["config"])


def parse_value(raw_value: str) -> Any:
    """
    Convert a command line value: integers become `int`, `null` becomes None,
    anything else stays a string.

    Args:
        raw_value: The value as typed.

    Returns:
        The converted value.
    """
    if raw_value in NULL_VALUES:
        return None
    with suppress(ValueError):
        return int(raw_value)
    return raw_value


def parse_conditions(conditions: Optional[List[str]]) -> Dict[str, Any]:
    """
    Parse `column=value` arguments into a condition mapping. A value holding
    commas becomes a list (matched with `IN`).

    Args:
        conditions: Arguments of the form "column=value", e.g. ["status=active", "id=1,2,3"].

    Returns:
        The condition mapping.

    Raises:
        ValueError: If an argument has no '=' or no column name.
    """
    result: Dict[str, Any] = {}
    for arg in conditions or []:
        if "=" not in arg:
            raise ValueError(f"Condition '{arg}' requires the form column=value.")
        column, raw_value = arg.split("=", 1)
        column = column.strip()
        if not column:
            raise ValueError(f"Condition '{arg}' has no column name.")
        if "," in raw_value:
            result[column] = [parse_value(item.strip()) for item in raw_value.split(",") if item.strip()]
        else:
            result[column] = parse_value(raw_value)
    LOG.debug(f"Parsed search conditions: {result}")
    return result


def rows_to_table(rows: Sequence[Any]) -> str:
    """
    Render rows as a table. Entities are shown with their visible values.

    Args:
        rows: Entities, dictionaries or scalar values.

    Returns:
        The table text.
    """
    records: List[Mapping[str, Any]] = []
    for row in rows:
        if isinstance(row, EntityDao):
            records.append(row.get_values())
        elif isinstance(row, Mapping):
            records.append(row)
        else:
            records.append({"id": row})
    return tabulate(records, headers="keys")
