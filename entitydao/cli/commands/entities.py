##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Implements the `entities` command, which lists the registered entity tags.
"""

import logging
from argparse import ArgumentParser, Namespace

from tabulate import tabulate

from entitydao.cli.commands.command_entry_point import CommandEntryPoint
from entitydao.cli.utils import load_cli_config
from entitydao.dao.registry import entity_registry


LOG = logging.getLogger("entitydao")


class EntitiesCommand(CommandEntryPoint):
    """
    Handles the `entities` CLI command.

    Methods:
        add_arguments: The `entities` command takes no arguments.
        process_command: Prints every registered tag with its class and table.
    """

    name = "entities"
    help = "List the registered entities."

    def add_arguments(self, parser: ArgumentParser):
        """The `entities` command has no arguments of its own."""

    def process_command(self, args: Namespace):
        """
        Print every registered entity tag.

        Args:
            args: Parsed CLI arguments.
        """
        load_cli_config(args)
        rows = []
        for tag in sorted(entity_registry.list_available()):
            entity_class = entity_registry.get_class(tag)
            rows.append((tag, f"{entity_class.__module__}.{entity_class.__name__}", entity_class.table_name))

        if not rows:
            LOG.info("No entities are registered. List entity modules under 'entities' in entitydao.yaml.")
            return
        print(tabulate(rows, headers=["Entity", "Class", "Table"]))
