##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Module of all entitydao-specific exception types.
"""

# Pylint complains that these exceptions are no different from Exception
# but we don't care, we just need new names for exceptions here
# pylint: disable=W0235

__all__ = (
    "EntityDaoError",
    "ColumnNotFoundError",
    "NotFoundError",
    "InvalidArgumentError",
    "IllegalStateError",
    "PrimaryKeyNotSetError",
    "PrimaryKeyIncompleteError",
    "PrimaryKeyAlreadySetError",
    "ConnectionNotSupportedError",
    "EntityNotRegisteredError",
)


class EntityDaoError(Exception):
    """
    Base class for every error raised by entitydao. Raised directly for
    generic failures that have no more specific type.
    """

    def __init__(self, message):
        super().__init__(message)


class ColumnNotFoundError(EntityDaoError):
    """
    Exception to signal that a column is neither present in an entity's data
    nor available as a computed property.
    """

    def __init__(self, message):
        super().__init__(message)


class NotFoundError(EntityDaoError):
    """
    Exception to signal that a lookup matched no row.
    """

    def __init__(self, message):
        super().__init__(message)


class InvalidArgumentError(EntityDaoError, ValueError):
    """
    Exception to signal a malformed argument, e.g. a scalar id passed
    for a compound primary key.
    """

    def __init__(self, message):
        super().__init__(message)


class IllegalStateError(EntityDaoError):
    """
    Exception to signal that an operation is not allowed in the
    current state of an entity or DAO.
    """

    def __init__(self, message):
        super().__init__(message)


class PrimaryKeyNotSetError(IllegalStateError):
    """
    Exception to signal that a scalar primary key has no value yet.
    """

    def __init__(self, message):
        super().__init__(message)


class PrimaryKeyIncompleteError(IllegalStateError):
    """
    Exception to signal that at least one column of a compound
    primary key is missing.
    """

    def __init__(self, message):
        super().__init__(message)


class PrimaryKeyAlreadySetError(IllegalStateError):
    """
    Exception to signal a second assignment of a scalar primary key.
    """

    def __init__(self, message):
        super().__init__(message)


class ConnectionNotSupportedError(EntityDaoError):
    """
    Exception to signal that an unsupported connection driver was requested.
    """

    def __init__(self, message):
        super().__init__(message)


class EntityNotRegisteredError(EntityDaoError):
    """
    Exception to signal that no entity class is registered under a tag.
    """

    def __init__(self, message):
        super().__init__(message)
