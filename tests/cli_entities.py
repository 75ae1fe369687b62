##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Entity module named in the configuration files of the CLI tests. Importing it
registers the sample entities with the global entity registry.
"""

from entitydao.dao.registry import entity_registry
from tests.sample_entities import MembershipDao, TagDao, UserDao


entity_registry.register("user", UserDao, aliases=["users"])
entity_registry.register("tag", TagDao)
entity_registry.register("membership", MembershipDao)
