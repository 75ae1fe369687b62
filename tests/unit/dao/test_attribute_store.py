##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Tests for the `dao/attribute_store.py` module.
"""

import pytest

from entitydao.dao.attribute_store import AttributeStore, values_differ


@pytest.mark.parametrize(
    "original, current, expected",
    [
        (1, 1, False),
        ("a", "a", False),
        (None, None, False),
        (1, "1", True),
        (1, True, True),
        (0, None, True),
        (None, "", True),
        ("a", "b", True),
        (1, 1.0, True),
    ],
)
def test_values_differ(original, current, expected: bool):
    """
    Test that values only compare equal with the same type and value.

    Args:
        original: The snapshot value.
        current: The current value.
        expected: Whether the values differ.
    """
    assert values_differ(original, current) is expected


class TestAttributeStore:
    """
    Tests for the `AttributeStore` class.
    """

    def test_no_changes_after_load(self):
        """
        Test that freshly loaded values are not changed.
        """
        store = AttributeStore({"id": 1, "email": "a@example.com"})
        assert store.changes() == {}

    def test_changes(self):
        """
        Test that modified and new columns are reported with their current values.
        """
        store = AttributeStore({"id": 1, "email": "a@example.com", "status": None})
        store.set("email", "b@example.com")
        store.set("status", "active")
        store.set("score", 3.5)
        assert store.changes() == {"email": "b@example.com", "status": "active", "score": 3.5}

    def test_changes_exclude(self):
        """
        Test that excluded columns are never reported.
        """
        store = AttributeStore({"email": "a@example.com"})
        store.set("id", 9)
        store.set("email", "b@example.com")
        assert store.changes(exclude=("id",)) == {"email": "b@example.com"}

    def test_snapshot_and_reset(self):
        """
        Test that `snapshot` accepts the current values and `reset` replaces everything.
        """
        store = AttributeStore()
        store.set("email", "a@example.com")
        store.snapshot()
        assert store.changes() == {}

        source = {"email": "b@example.com"}
        store.reset(source)
        source["email"] = "modified after reset"
        assert store.data == {"email": "b@example.com"}
        assert store.original_data == {"email": "b@example.com"}

    def test_presence(self):
        """
        Test the difference between a column that is set to None and a present value.
        """
        store = AttributeStore({"status": None, "email": "a@example.com"})
        assert store.contains("status")
        assert not store.is_present("status")
        assert store.is_present("email")
        assert not store.contains("score")
        assert store.get("score", "default") == "default"
