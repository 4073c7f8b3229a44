# routes_contacts.py
"""Customers and suppliers: plain relational CRUD with integer ids.

Suppliers also carry GST terms and a list of contact people. The contacts are
replaced wholesale on every write, so a PUT without `contacts` clears them.
"""

import json

from lalitha.core.errors import BadRequest
from lalitha.core.schemas import CUSTOMER, GST_TYPES, SUPPLIER, SUPPLIER_CONTACT
from lalitha.api.dashboard import bp
from lalitha.api.resources import SqlResource, register_crud


def normalize_contacts(raw) -> list:
    """Validate contact entries and return them in stored (wire-keyed) form."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise BadRequest("contacts must be a list")
    contacts = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise BadRequest("Each contact must be an object")
        SUPPLIER_CONTACT.require(entry)
        contacts.append(SUPPLIER_CONTACT.from_wire(entry))
    return contacts


class SupplierResource(SqlResource):

    def values(self, body: dict) -> dict:
        values = super().values(body)
        if values["gst_type"] not in GST_TYPES:
            raise BadRequest("gstType must be one of: " + ", ".join(GST_TYPES))
        values["contacts"] = json.dumps(normalize_contacts(body.get("contacts")))
        return values

    def to_wire(self, row: dict) -> dict:
        supplier = super().to_wire(row)
        supplier["contacts"] = [SUPPLIER_CONTACT.to_wire(c) for c in supplier["contacts"]
                                if isinstance(c, dict)]
        return supplier


customers = SqlResource("customer", "customers", "customers", CUSTOMER)
suppliers = SupplierResource("supplier", "suppliers", "suppliers", SUPPLIER)

register_crud(bp, "/api/customers", customers)
register_crud(bp, "/api/suppliers", suppliers)
