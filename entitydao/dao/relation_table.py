##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Diff-based maintenance of many-to-many relation tables.
"""

import logging
from typing import Any, Iterable, List, Tuple

from entitydao.connections.connection import Connection


LOG = logging.getLogger(__name__)


class RelationTableSync:
    """
    Keeps the rows of a relation table that belong to one owner in sync with
    a list of related ids.

    Attributes:
        db (Connection): The connection used for inserts and deletes.
        relation_table (str): The relation table.
        primary_key_name (str): The column referencing the owner.
        foreign_key_name (str): The column referencing the related entity.

    Methods:
        sync: Insert the missing relations and delete the obsolete ones.
    """

    def __init__(self, db: Connection, relation_table: str, primary_key_name: str, foreign_key_name: str):
        self.db: Connection = db
        self.relation_table: str = relation_table
        self.primary_key_name: str = primary_key_name
        self.foreign_key_name: str = foreign_key_name

    def sync(self, owner_id: Any, existing: Iterable[Any], updated: Iterable[Any]) -> Tuple[List[Any], List[Any]]:
        """
        Insert one row per id in `updated` that is not in `existing`, and delete
        one row per id in `existing` that is not in `updated`. Repeated ids are
        handled once, in order of first appearance.

        Args:
            owner_id: The id of the owning entity.
            existing: The ids currently related.
            updated: The ids that should be related.

        Returns:
            The inserted ids and the deleted ids.
        """
        existing = list(existing)
        updated = list(updated)

        inserted = list(dict.fromkeys(related_id for related_id in updated if related_id not in existing))
        deleted = list(dict.fromkeys(related_id for related_id in existing if related_id not in updated))

        for related_id in inserted:
            self.db.insert(
                self.relation_table, {self.primary_key_name: owner_id, self.foreign_key_name: related_id}
            )

        for related_id in deleted:
            self.db.delete(
                self.relation_table, {self.primary_key_name: owner_id, self.foreign_key_name: related_id}
            )

        if inserted or deleted:
            LOG.debug(
                f"Synchronized '{self.relation_table}' for {owner_id}: "
                f"inserted {len(inserted)}, deleted {len(deleted)}"
            )
        return inserted, deleted
