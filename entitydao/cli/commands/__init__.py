##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
entitydao CLI Commands Package.

Each module defines one command, built around the `CommandEntryPoint` interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    entities: Implements the `entities` command, listing the registered entities.
    find: Implements the `find` command, loading one entity by primary key.
    search: Implements the `search` command, running a paginated search.
"""

from entitydao.cli.commands.entities import EntitiesCommand
from entitydao.cli.commands.find import FindCommand
from entitydao.cli.commands.search import SearchCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    EntitiesCommand(),
    FindCommand(),
    SearchCommand(),
]
