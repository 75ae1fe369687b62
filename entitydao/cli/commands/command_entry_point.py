##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Defines the abstract base class for entitydao CLI commands.

Every command declares its name and help text, adds its own arguments and
processes the parsed arguments. Commands that talk to the database get the
configured connection from `connect`, which closes it afterwards.
"""

from abc import ABC, abstractmethod
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace
from contextlib import contextmanager
from typing import Generator

from entitydao.cli.utils import load_cli_config, open_connection
from entitydao.connections.connection import Connection


class CommandEntryPoint(ABC):
    """
    Abstract base class for an entitydao CLI command entry point.

    Attributes:
        name (str): The command name, as typed on the command line.
        help (str): One-line description shown by `entitydao --help`.

    Methods:
        add_parser: Adds the parser for this command to the main `ArgumentParser`.
        add_arguments: Adds the command-specific arguments.
        process_command: Executes the logic for this CLI command.
        connect: Context manager yielding the configured connection.
    """

    name: str = ""
    help: str = ""

    def add_parser(self, subparsers: ArgumentParser) -> ArgumentParser:
        """
        Add the parser for this command to the main `ArgumentParser`.

        Args:
            subparsers: The subparsers object of the main parser.

        Returns:
            The parser of this command.
        """
        parser = subparsers.add_parser(self.name, help=self.help, formatter_class=ArgumentDefaultsHelpFormatter)
        parser.set_defaults(func=self.process_command)
        self.add_arguments(parser)
        return parser

    @abstractmethod
    def add_arguments(self, parser: ArgumentParser):
        """Add the arguments of this command to its parser."""
        raise NotImplementedError("Subclasses of `CommandEntryPoint` must implement an `add_arguments` method.")

    @abstractmethod
    def process_command(self, args: Namespace):
        """Execute the logic for this CLI command."""
        raise NotImplementedError("Subclasses of `CommandEntryPoint` must implement an `process_command` method.")

    @contextmanager
    def connect(self, args: Namespace) -> Generator[Connection, None, None]:
        """
        Load the configuration and yield the configured connection. The
        connection is closed when the block ends.

        Args:
            args: Parsed CLI arguments.

        Yields:
            The open connection.
        """
        config = load_cli_config(args)
        db = open_connection(config)
        try:
            yield db
        finally:
            db.close()
