##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
entitydao: a generic entity-to-relational mapping layer.

Entities represent single-table rows. The layer handles loading, dirty-tracked
saving and parameterized searching against a relational store.
"""

__version__ = "1.0.0"
VERSION = __version__
