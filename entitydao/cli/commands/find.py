##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Implements the `find` command, which loads one entity by primary key.
"""

import logging
from argparse import ArgumentParser, Namespace

from tabulate import tabulate

from entitydao.cli.commands.command_entry_point import CommandEntryPoint
from entitydao.cli.utils import parse_conditions, parse_value
from entitydao.dao.registry import entity_registry


LOG = logging.getLogger("entitydao")


class FindCommand(CommandEntryPoint):
    """
    Handles the `find` CLI command: `entitydao find <entity> <id>`.

    Methods:
        add_arguments: Adds the `find` arguments to the CLI parser.
        process_command: Loads the entity and prints its values.
    """

    name = "find"
    help = "Load one entity by its primary key and print its values."

    def add_arguments(self, parser: ArgumentParser):
        parser.add_argument("entity", type=str, help="The registered tag of the entity.")
        parser.add_argument(
            "id",
            type=str,
            nargs="+",
            help="The primary key value, or column=value pairs for compound keys.",
        )

    def process_command(self, args: Namespace):
        """
        Load an entity and print its visible values.

        Args:
            args: Parsed CLI arguments.
        """
        if len(args.id) == 1 and "=" not in args.id[0]:
            key = parse_value(args.id[0])
        else:
            key = parse_conditions(args.id)

        with self.connect(args) as db:
            entity = entity_registry.create_entity(args.entity, db).find(key)
            print(tabulate(entity.get_values().items(), tablefmt="presto"))
