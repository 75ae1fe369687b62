##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Implements the `search` command, which runs a paginated search over an
entity's table and prints the matching rows.
"""

import logging
from argparse import ArgumentParser, Namespace

from entitydao.cli.commands.command_entry_point import CommandEntryPoint
from entitydao.cli.utils import parse_conditions, rows_to_table
from entitydao.dao.registry import entity_registry
from entitydao.dao.search import SearchParams
from entitydao.utils import compose_order_argument


LOG = logging.getLogger("entitydao")


class SearchCommand(CommandEntryPoint):
    """
    Handles the `search` CLI command.

    Methods:
        add_arguments: Adds the `search` arguments to the CLI parser.
        build_params: Converts the parsed arguments into `SearchParams`.
        process_command: Runs the search and prints the rows.
    """

    name = "search"
    help = "Search the table of an entity and print the matching rows."

    def add_arguments(self, parser: ArgumentParser):
        parser.add_argument("entity", type=str, help="The registered tag of the entity.")
        parser.add_argument(
            "--cond",
            action="append",
            default=None,
            metavar="COLUMN=VALUE",
            help="Only show rows where COLUMN equals VALUE. Comma separated values match any of them; "
            "'null' matches NULL. Can be repeated.",
        )
        parser.add_argument(
            "--order",
            action="append",
            default=None,
            metavar="'COLUMN [ASC|DESC]'",
            help="Sort order. Can be repeated.",
        )
        parser.add_argument("--count", type=int, default=20, help="Page size; 0 shows every row.")
        parser.add_argument("--offset", type=int, default=0, help="Number of rows to skip.")
        parser.add_argument("--ids-only", action="store_true", help="Only print primary key values.")

    def build_params(self, args: Namespace) -> SearchParams:
        """
        Convert the parsed arguments into search parameters.

        Args:
            args: Parsed CLI arguments.

        Returns:
            The search parameters.
        """
        return SearchParams(
            cond=parse_conditions(args.cond),
            order=[compose_order_argument(token) for token in args.order or []] or None,
            count=args.count,
            offset=args.offset,
            ids_only=args.ids_only,
        )

    def process_command(self, args: Namespace):
        """
        Run the search and print the rows followed by a summary line.

        Args:
            args: Parsed CLI arguments.
        """
        params = self.build_params(args)
        with self.connect(args) as db:
            result = entity_registry.create_entity(args.entity, db).search(params)

        if len(result):
            print(rows_to_table(result.rows))
        else:
            LOG.info(f"No {args.entity} rows match the given conditions.")
        print(f"\nShowing {len(result)} of {result.total} rows (offset {result.offset}).")
