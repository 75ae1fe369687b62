##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Main CLI parser setup for the entitydao command-line interface.

This module defines the primary argument parser for the `entitydao` CLI tool,
including custom error handling and integration of all available subcommands.
"""

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from entitydao import VERSION
from entitydao.cli.commands import ALL_COMMANDS


DEFAULT_LOG_LEVEL = "INFO"

DESCRIPTION = "entitydao: load, search and inspect the entities of a relational database."


class HelpParser(ArgumentParser):
    """
    This class overrides the error message of the argument parser to
    print the help message when an error happens.

    Methods:
        error: Override the error message of the `ArgumentParser` class.
    """

    def error(self, message: str):
        """
        Override the error message of the `ArgumentParser` class.

        Args:
            message: The error message to log.
        """
        sys.stderr.write(f"error: {message}\n")
        self.print_help()
        sys.exit(2)


def build_main_parser() -> ArgumentParser:
    """
    Set up the command-line argument parser for entitydao.

    Returns:
        An `ArgumentParser` object with every command of the CLI.
    """
    parser = HelpParser(
        prog="entitydao",
        description=DESCRIPTION,
        formatter_class=RawDescriptionHelpFormatter,
        epilog="See entitydao <command> --help for more info",
    )
    parser.add_argument("-v", "--version", action="version", version=VERSION)
    parser.add_argument(
        "-lvl",
        "--level",
        type=str,
        default=None,
        help="Set log level: DEBUG, INFO, WARNING, ERROR "
        f"[Default: logging.level of entitydao.yaml, else {DEFAULT_LOG_LEVEL}]",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="Path to an entitydao.yaml file, or to the directory holding it. "
        "[Default: ./entitydao.yaml, then ~/.entitydao/entitydao.yaml]",
    )
    subparsers = parser.add_subparsers(dest="subparsers", required=True)

    for command in ALL_COMMANDS:
        command.add_parser(subparsers)

    return parser
