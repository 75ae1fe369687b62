##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
The `dao` package contains the data access objects of entitydao.

Modules:
    dao: `Dao`, raw SQL access on top of a borrowed connection.
    entity_dao: `EntityDao`, the base class of every entity, and `computed_property`.
    field_mapping: `FieldMapping`, column/property name translation and value formats.
    attribute_store: `AttributeStore`, current and original values with change detection.
    primary_key: `PrimaryKeyPolicy`, scalar and compound primary keys.
    conditions: The condition mapping shared by `find_all` and `search`.
    search: `SearchMixin`, `SearchParams` and `SearchResult`.
    relation_table: `RelationTableSync`, many-to-many relation table maintenance.
    registry: `EntityRegistry` and the shared `entity_registry` instance.
    model: `Model`, the base class of business models built on entities.
"""

from entitydao.dao.dao import Dao
from entitydao.dao.entity_dao import EntityDao, computed_property
from entitydao.dao.model import Model
from entitydao.dao.registry import EntityRegistry, entity_registry
from entitydao.dao.relation_table import RelationTableSync
from entitydao.dao.search import SearchParams, SearchResult


__all__ = [
    "Dao",
    "EntityDao",
    "EntityRegistry",
    "Model",
    "RelationTableSync",
    "SearchParams",
    "SearchResult",
    "computed_property",
    "entity_registry",
]
