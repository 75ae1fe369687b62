##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
The `abstracts` package provides ABC classes that can be used throughout
entitydao's codebase.

Modules:
    factory: Contains `BaseFactory`, used to manage pluggable components.
"""

from entitydao.abstracts.factory import BaseFactory


__all__ = ["BaseFactory"]
