##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Entity classes and the matching SQLite schema used throughout the test suite.
"""

from entitydao.dao.entity_dao import EntityDao, computed_property
from entitydao.formats import Format


SCHEMA = [
    """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_name TEXT,
        email TEXT,
        password TEXT,
        status TEXT,
        active INTEGER,
        score REAL,
        settings TEXT,
        created TEXT,
        updated TEXT
    )
    """,
    "CREATE TABLE tags (id INTEGER PRIMARY KEY, name TEXT)",
    "CREATE TABLE user_tags (user_id INTEGER, tag_id INTEGER, PRIMARY KEY (user_id, tag_id))",
    "CREATE TABLE memberships (group_id INTEGER, user_id INTEGER, role TEXT, PRIMARY KEY (group_id, user_id))",
]


class UserDao(EntityDao):
    """A user: renamed, hidden, formatted and timestamped columns."""

    table_name = "users"
    field_map = {"user_name": "name"}
    format_map = {
        "active": Format.BOOL,
        "settings": Format.JSON,
        "created": Format.DATETIME,
        "updated": Format.DATETIME,
    }
    hidden_fields = ["password"]
    columns = ["email", "password", "status", "active", "score", "settings", "created", "updated"]
    timestamp_enabled = True

    @computed_property("display_name")
    def get_display_name(self) -> str:
        return f"{self.name} <{self.email}>"


class TagDao(EntityDao):
    """A tag with the default `id` primary key."""

    table_name = "tags"
    columns = ["name"]


class MembershipDao(EntityDao):
    """A membership, identified by a compound primary key."""

    table_name = "memberships"
    primary_key = ["group_id", "user_id"]
    columns = ["role"]
