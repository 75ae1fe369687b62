##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
The `query` package builds SQL text for the DAOs.

Modules:
    query_builder: Contains `QueryBuilder`, a fluent and cloneable SELECT builder.
    raw_sql: Contains `RawSql`, the type used for trusted SQL fragments.
"""

from entitydao.query.query_builder import QueryBuilder
from entitydao.query.raw_sql import RawSql


__all__ = ["QueryBuilder", "RawSql"]
