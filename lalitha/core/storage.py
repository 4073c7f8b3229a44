"""
lalitha/core/storage.py — Key/Value Document Storage

Inventory, sales and the business profile are schemaless-ish documents rather
than relational rows. They live in the `documents` table of the main SQLite
database, one JSON body per (collection, id).

Storage owns every write to those collections. Writes run under one lock, so
read-modify-write sequences (stock movements, purchase receipts) never
interleave between requests in the same process.

Usage:
    from lalitha.core.storage import get_storage
    store = get_storage()
    item = store.add("inventory", {"dress_name": "Silk Saree"})
    store.replace("inventory", item["id"], {...})
"""

import json
import uuid
import logging
import threading

from lalitha.core import db
from lalitha.core.normalize import utcnow_iso

log = logging.getLogger("lalitha.storage")

SINGLETON_ID = "singleton"


def new_id() -> str:
    return uuid.uuid4().hex[:12]


def _to_doc(row: dict) -> dict:
    body = json.loads(row["body"])
    body["id"] = row["id"]
    body["created_at"] = row["created_at"]
    body["updated_at"] = row["updated_at"]
    return body


def _strip(body: dict) -> dict:
    return {k: v for k, v in body.items()
            if k not in ("id", "created_at", "updated_at")}


class Storage:
    """Document repository over the `documents` table."""

    def __init__(self):
        self._lock = threading.RLock()

    def list(self, collection: str) -> list:
        """All documents in a collection, newest first."""
        rows = db.fetch_all(
            "SELECT * FROM documents WHERE collection=? "
            "ORDER BY created_at DESC, rowid DESC", (collection,))
        return [_to_doc(r) for r in rows]

    def get(self, collection: str, doc_id: str) -> dict | None:
        row = db.fetch_one(
            "SELECT * FROM documents WHERE collection=? AND id=?",
            (collection, str(doc_id)))
        return _to_doc(row) if row else None

    def add(self, collection: str, body: dict, doc_id: str = None) -> dict:
        now = utcnow_iso()
        doc_id = doc_id or new_id()
        with self._lock:
            db.execute(
                "INSERT INTO documents (collection, id, body, created_at, updated_at) "
                "VALUES (?,?,?,?,?)",
                (collection, doc_id, json.dumps(_strip(body), default=str), now, now))
        log.debug("storage add %s/%s", collection, doc_id)
        return self.get(collection, doc_id)

    def replace(self, collection: str, doc_id: str, body: dict) -> dict | None:
        """Overwrite a document body. Keeps id and created_at. None if absent."""
        with self._lock:
            touched = db.execute(
                "UPDATE documents SET body=?, updated_at=? WHERE collection=? AND id=?",
                (json.dumps(_strip(body), default=str), utcnow_iso(),
                 collection, str(doc_id)))
        if not touched:
            return None
        return self.get(collection, doc_id)

    def update(self, collection: str, doc_id: str, mutate) -> dict | None:
        """Apply `mutate(doc) -> doc` under the write lock. None if absent.

        Exceptions raised by `mutate` abort the write and propagate.
        """
        with self._lock:
            current = self.get(collection, doc_id)
            if current is None:
                return None
            return self.replace(collection, doc_id, mutate(current))

    def upsert(self, collection: str, match, mutate, create) -> tuple:
        """Mutate the newest document where `match(doc)` holds, else add `create()`.

        Returns (doc, created). The lookup and the write share one lock hold.
        """
        with self._lock:
            for current in self.list(collection):
                if match(current):
                    return self.replace(collection, current["id"], mutate(current)), False
            return self.add(collection, create()), True

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            return db.execute(
                "DELETE FROM documents WHERE collection=? AND id=?",
                (collection, str(doc_id))) > 0

    # ── Singletons (business profile) ─────────────────────────────────────
    def get_singleton(self, collection: str) -> dict | None:
        return self.get(collection, SINGLETON_ID)

    def put_singleton(self, collection: str, body: dict) -> dict:
        with self._lock:
            doc = self.replace(collection, SINGLETON_ID, body)
            if doc is None:
                doc = self.add(collection, body, doc_id=SINGLETON_ID)
        return doc


_storage = None


def get_storage() -> Storage:
    """Return the process Storage instance."""
    global _storage
    if _storage is None:
        _storage = Storage()
    return _storage


def set_storage_for_test(storage: Storage = None):
    """For testing only: install a fresh Storage instance."""
    global _storage
    _storage = storage or Storage()
    return _storage
