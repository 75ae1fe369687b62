##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Main entry point into the entitydao command-line interface.
"""

import logging
import sys
import traceback
from argparse import Namespace
from typing import Tuple

from entitydao.cli.argparse_main import DEFAULT_LOG_LEVEL, build_main_parser
from entitydao.config.configfile import initialize_config
from entitydao.log_formatter import setup_logging


LOG = logging.getLogger("entitydao")


def get_logging_settings(args: Namespace) -> Tuple[str, bool]:
    """
    Determine the log level and color setting. The `-lvl` argument wins over
    the `logging` section of the configuration file.

    Args:
        args: Parsed CLI arguments.

    Returns:
        The log level and whether to use colored logs.
    """
    level = args.level
    colors = True
    try:
        config = initialize_config(args.config)
    except ValueError:
        # Reported by the command itself once logging is set up
        config = None
    if config is not None and config.logging is not None:
        level = level or getattr(config.logging, "level", None)
        colors = bool(getattr(config.logging, "colors", True))
    return (level or DEFAULT_LOG_LEVEL).upper(), colors


def main():
    """
    Entry point for the entitydao command-line interface (CLI).

    This function sets up the argument parser, initializes logging and runs
    the selected command. Any error raised by the command is logged and ends
    the program with exit code 1.
    """
    parser = build_main_parser()
    if len(sys.argv) == 1:
        parser.print_help(sys.stdout)
        return 1
    args = parser.parse_args()

    log_level, colors = get_logging_settings(args)
    setup_logging(logger=LOG, log_level=log_level, colors=colors)

    try:
        args.func(args)
        # Top of the program stack: every error is reported to the user
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(1)

    sys.exit()


if __name__ == "__main__":
    main()
