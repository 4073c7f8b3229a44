"""
Generic CRUD resource handlers.

One handler class per backing store, instantiated per resource:

    SqlResource       relational rows, integer ids (strict parse → 400)
    DocumentResource  lalitha.core.storage documents, opaque string ids

Both expose list / create / update / delete returning wire-shaped dicts and
raising BadRequest / NotFound. `register_crud` mounts the four routes:

    GET    <url>         list, newest first (session required unless public)
    POST   <url>         create           (session required)
    PUT    <url>/<id>    full replacement (session required)
    DELETE <url>/<id>    delete           (session required)
"""

import logging

from lalitha.core import db
from lalitha.core.errors import NotFound
from lalitha.core.normalize import Schema, fits_sqlite_int, parse_id, utcnow_iso
from lalitha.core.security import session_required
from lalitha.core.storage import get_storage
from lalitha.api.envelope import guarded, json_body, ok

log = logging.getLogger("lalitha.api")


class SqlResource:
    """Rows of one table. Subclasses override `values` / `to_wire` for nested fields."""

    order_by = "created_at DESC, id DESC"

    def __init__(self, label: str, plural: str, table: str, schema: Schema):
        self.label = label
        self.plural = plural
        self.table = table
        self.schema = schema

    @property
    def not_found(self) -> str:
        return f"{self.label.capitalize()} not found"

    def row_id(self, raw_id) -> int:
        row_id = parse_id(raw_id, self.label)
        # Well-formed but beyond any stored rowid.
        if not fits_sqlite_int(row_id):
            raise NotFound(self.not_found)
        return row_id

    def to_wire(self, row: dict) -> dict:
        return self.schema.to_wire(row)

    def values(self, body: dict) -> dict:
        self.schema.require(body)
        return self.schema.from_wire(body)

    def list(self, where: dict = None) -> list:
        return [self.to_wire(r) for r in db.list_rows(self.table, where, self.order_by)]

    def create(self, body: dict) -> dict:
        values = self.values(body)
        now = utcnow_iso()
        values["created_at"] = now
        values["updated_at"] = now
        row = db.insert_row(self.table, values)
        log.info("%s created: id=%s", self.label, row["id"])
        return self.to_wire(row)

    def update(self, raw_id, body: dict) -> dict:
        row_id = self.row_id(raw_id)
        values = self.values(body)
        values["updated_at"] = utcnow_iso()
        row = db.update_row(self.table, row_id, values)
        if row is None:
            raise NotFound(self.not_found)
        return self.to_wire(row)

    def delete(self, raw_id):
        row_id = self.row_id(raw_id)
        if not db.delete_row(self.table, row_id):
            raise NotFound(self.not_found)
        log.info("%s deleted: id=%s", self.label, row_id)


class DocumentResource:
    def __init__(self, label: str, plural: str, collection: str, schema: Schema,
                 not_found: str = None):
        self.label = label
        self.plural = plural
        self.collection = collection
        self.schema = schema
        self.not_found = not_found or f"{label.capitalize()} not found"

    @property
    def store(self):
        return get_storage()

    def get(self, doc_id) -> dict:
        doc = self.store.get(self.collection, doc_id)
        if doc is None:
            raise NotFound(self.not_found)
        return doc

    def list(self) -> list:
        return [self.schema.to_wire(d) for d in self.store.list(self.collection)]

    def create(self, body: dict) -> dict:
        self.schema.require(body)
        doc = self.store.add(self.collection, self.schema.from_wire(body))
        log.info("%s created: id=%s", self.label, doc["id"])
        return self.schema.to_wire(doc)

    def update(self, doc_id, body: dict) -> dict:
        self.schema.require(body)
        values = self.schema.from_wire(body)
        # Server-managed keys (not writable) survive the replacement.
        doc = self.store.update(self.collection, doc_id,
                                lambda current: {**current, **values})
        if doc is None:
            raise NotFound(self.not_found)
        return self.schema.to_wire(doc)

    def delete(self, doc_id):
        if not self.store.delete(self.collection, doc_id):
            raise NotFound(self.not_found)
        log.info("%s deleted: id=%s", self.label, doc_id)


def register_crud(bp, url: str, resource, public_read: bool = False):
    """Mount the generic routes for `resource` on the Blueprint.

    Writes always need a session; the list route only when `public_read` is off.
    """
    name = resource.plural

    def list_view():
        return ok(resource.list())
    if not public_read:
        list_view = session_required(list_view)
    list_view = guarded(f"Failed to fetch {resource.plural}")(list_view)
    bp.add_url_rule(url, f"{name}_list", list_view, methods=["GET"])

    @guarded(f"Failed to add {resource.label}")
    @session_required
    def create_view():
        return ok(resource.create(json_body()))
    bp.add_url_rule(url, f"{name}_create", create_view, methods=["POST"])

    @guarded(f"Failed to update {resource.label}")
    @session_required
    def update_view(item_id):
        return ok(resource.update(item_id, json_body()))
    bp.add_url_rule(f"{url}/<item_id>", f"{name}_update", update_view, methods=["PUT"])

    @guarded(f"Failed to delete {resource.label}")
    @session_required
    def delete_view(item_id):
        resource.delete(item_id)
        return ok()
    bp.add_url_rule(f"{url}/<item_id>", f"{name}_delete", delete_view, methods=["DELETE"])
