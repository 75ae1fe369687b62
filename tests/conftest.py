##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import logging
import os
from glob import glob

import pytest

from tests.fixture_types import FixtureModification


# pylint: disable=redefined-outer-name


#######################################
# Loading in Module Specific Fixtures #
#######################################

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.dirname(TESTS_DIR)

fixture_glob = os.path.join(TESTS_DIR, "fixtures", "**", "*.py")
pytest_plugins = [
    os.path.relpath(fixture_file, ROOT_DIR).replace(os.sep, ".")[: -len(".py")]
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture(autouse=True)
def reset_entitydao_logger() -> FixtureModification:
    """
    Remove handlers that a test added to the "entitydao" logger (e.g. through
    `setup_logging`) so that they do not leak into other tests.
    """
    logger = logging.getLogger("entitydao")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
