##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""This module sets up logging for the entitydao CLI and for applications that want its format."""

import logging
import sys

import coloredlogs


FORMATS = {
    "DEFAULT": "[%(asctime)s: %(levelname)s] %(message)s",
    # Module loggers are named after their module, e.g. entitydao.dao.search
    "DEBUG": "[%(asctime)s: %(levelname)s] [%(name)s: %(lineno)d] %(message)s",
}


def setup_logging(logger: logging.Logger, log_level: str = "INFO", colors: bool = True):
    """
    Attach a stdout handler to `logger` and set its level. SQL statements are
    logged at DEBUG level, so DEBUG also switches to the format showing the
    emitting module.

    Args:
        logger: The logger to configure, usually the "entitydao" logger.
        log_level: Logger level name (case-insensitive).
        colors: If True use colored logs.
    """
    log_level = log_level.upper()
    fmt = FORMATS["DEBUG"] if log_level == "DEBUG" else FORMATS["DEFAULT"]
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)

    logger.setLevel(log_level)
    logger.propagate = False

    if colors is True:
        coloredlogs.install(level=log_level, logger=logger, fmt=fmt)
