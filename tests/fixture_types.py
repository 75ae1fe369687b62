##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
It's hard to type hint pytest fixtures in a way that makes it clear
that the variable being used is a fixture. This module will created
aliases for these fixtures in order to make it easier to track what's
happening.

The types here will be defined as such:
- `FixtureCallable`: A fixture that returns a function
- `FixtureConnection`: A fixture that returns an entitydao `Connection`
- `FixtureDict`: A fixture that returns a dictionary
- `FixtureEntity`: A fixture that returns an entity
- `FixtureModification`: A fixture that modifies something but never actually
                         returns/yields a value to be used in the test.
- `FixtureStr`: A fixture that returns a string
"""

from collections.abc import Callable
from typing import Annotated, Any, Dict, List, TypeVar

import pytest

from entitydao.connections.connection import Connection
from entitydao.dao.entity_dao import EntityDao


K = TypeVar("K")
V = TypeVar("V")

FixtureCallable = Annotated[Callable, pytest.fixture]
FixtureConnection = Annotated[Connection, pytest.fixture]
FixtureDict = Annotated[Dict[K, V], pytest.fixture]
FixtureEntity = Annotated[EntityDao, pytest.fixture]
FixtureList = Annotated[List[K], pytest.fixture]
FixtureModification = Annotated[Any, pytest.fixture]
FixtureStr = Annotated[str, pytest.fixture]
