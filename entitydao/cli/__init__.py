##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
The entitydao command-line interface.

Modules:
    argparse_main: Builds the main argument parser.
    utils: Helpers shared by the CLI commands.
    commands: The individual CLI commands.
"""
