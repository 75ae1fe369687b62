##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
entitydao's configuration.
"""

import os


APP_FILENAME: str = "entitydao.yaml"
USER_HOME: str = os.path.expanduser("~")
ENTITYDAO_HOME: str = os.path.join(USER_HOME, ".entitydao")
DEFAULT_DB_PATH: str = os.path.join(ENTITYDAO_HOME, "entitydao.db")
