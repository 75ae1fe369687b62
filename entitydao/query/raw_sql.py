##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Defines `RawSql`, the value type for trusted SQL fragments.

Fragments wrapped in `RawSql` are inserted into queries verbatim. They must
never contain unescaped user input; wrapping a string in `RawSql` marks the
call site where that guarantee is made.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RawSql:
    """
    A trusted, verbatim SQL fragment (e.g. `RawSql("u.age > 18")`).

    Attributes:
        sql: The SQL text.
    """

    sql: str

    def __str__(self) -> str:
        return self.sql

    def __bool__(self) -> bool:
        return bool(self.sql)
