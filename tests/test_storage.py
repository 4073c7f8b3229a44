"""
tests/test_storage.py — Document storage over the documents table
"""
import pytest

from lalitha.core.storage import SINGLETON_ID, get_storage


@pytest.fixture
def store():
    return get_storage()


class TestStorage:

    def test_add_assigns_id_and_stamps(self, store):
        doc = store.add("inventory", {"dress_name": "Saree"})
        assert len(doc["id"]) == 12
        assert doc["created_at"].endswith("Z")
        assert doc["created_at"] == doc["updated_at"]
        assert store.get("inventory", doc["id"])["dress_name"] == "Saree"

    def test_list_newest_first(self, store):
        first = store.add("inventory", {"n": 1})
        second = store.add("inventory", {"n": 2})
        assert [d["id"] for d in store.list("inventory")] == [second["id"], first["id"]]

    def test_collections_are_separate(self, store):
        store.add("inventory", {"n": 1})
        assert store.list("sales") == []

    def test_replace_keeps_id_and_created_at(self, store):
        doc = store.add("inventory", {"n": 1})
        new = store.replace("inventory", doc["id"], {"n": 2, "id": "hijack", "created_at": "x"})
        assert new["id"] == doc["id"]
        assert new["created_at"] == doc["created_at"]
        assert new["n"] == 2

    def test_replace_missing_returns_none(self, store):
        assert store.replace("inventory", "nope", {"n": 1}) is None

    def test_update_missing_returns_none(self, store):
        assert store.update("inventory", "nope", lambda d: d) is None

    def test_update_exception_leaves_document(self, store):
        doc = store.add("inventory", {"n": 1})

        def boom(current):
            raise ValueError("no")

        with pytest.raises(ValueError):
            store.update("inventory", doc["id"], boom)
        assert store.get("inventory", doc["id"])["n"] == 1

    def test_delete(self, store):
        doc = store.add("inventory", {"n": 1})
        assert store.delete("inventory", doc["id"]) is True
        assert store.delete("inventory", doc["id"]) is False
        assert store.get("inventory", doc["id"]) is None

    def test_singleton_created_then_replaced(self, store):
        assert store.get_singleton("business_profile") is None
        store.put_singleton("business_profile", {"business_name": "A"})
        doc = store.put_singleton("business_profile", {"business_name": "B"})
        assert doc["id"] == SINGLETON_ID
        assert doc["business_name"] == "B"
        assert len(store.list("business_profile")) == 1

    def test_upsert_adds_when_nothing_matches(self, store):
        doc, created = store.upsert("inventory", lambda d: d.get("code") == "K1",
                                    lambda d: {**d, "n": d["n"] + 1},
                                    lambda: {"code": "K1", "n": 1})
        assert created is True
        assert doc["n"] == 1

    def test_upsert_mutates_match(self, store):
        other = store.add("inventory", {"code": "K2", "n": 5})
        first, _ = store.upsert("inventory", lambda d: d.get("code") == "K1",
                                lambda d: d, lambda: {"code": "K1", "n": 1})
        doc, created = store.upsert("inventory", lambda d: d.get("code") == "K1",
                                    lambda d: {**d, "n": d["n"] + 1},
                                    lambda: {"code": "K1", "n": 1})
        assert created is False
        assert doc["id"] == first["id"]
        assert doc["n"] == 2
        assert store.get("inventory", other["id"])["n"] == 5
        assert len(store.list("inventory")) == 2
