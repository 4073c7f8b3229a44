# routes_enquiries.py
"""Customer enquiries from the storefront.

Create is public (the enquiry form posts here). Staff only ever change the
follow-up `status` and `notes`; the path id is passed to the query as-is,
so an id that isn't a number simply matches nothing (404).
"""

import logging

from flask import request

from lalitha.core import db
from lalitha.core.errors import BadRequest, NotFound
from lalitha.core.normalize import utcnow_iso
from lalitha.core.schemas import ENQUIRY, ENQUIRY_FOLLOW_UP, ENQUIRY_STATUSES
from lalitha.core.security import session_required
from lalitha.core.storage import get_storage
from lalitha.api.dashboard import bp
from lalitha.api.envelope import guarded, json_body, ok
from lalitha.api.resources import SqlResource

log = logging.getLogger("lalitha.api")

TABLE = "customer_enquiries"

enquiries = SqlResource("enquiry", "enquiries", TABLE, ENQUIRY)


def _validate_status(status):
    if not status:
        raise BadRequest("Status is required")
    if status not in ENQUIRY_STATUSES:
        raise BadRequest("Invalid status")
    return status


def _with_product(enquiry: dict, products: dict) -> dict:
    """Attach name, code and image of the linked inventory item, when it still exists."""
    product = products.get(enquiry["productId"]) or {}
    enquiry["productDressName"] = product.get("dress_name", "")
    enquiry["productDressCode"] = product.get("dress_code", "")
    enquiry["productImageUrl"] = product.get("image_url") or ""
    return enquiry


@bp.route("/api/enquiries")
@guarded("Failed to fetch enquiries")
@session_required
def api_enquiries():
    """List enquiries, newest first. ?status=pending filters exactly."""
    status = request.args.get("status", "").strip()
    where = {"status": _validate_status(status)} if status else None
    products = {d["id"]: d for d in get_storage().list("inventory")}
    return ok([_with_product(e, products) for e in enquiries.list(where)])


@bp.route("/api/enquiries", methods=["POST"])
@guarded("Failed to create enquiry")
def api_enquiries_add():
    enquiry = enquiries.create(json_body())
    log.info("Enquiry received: %s for %s",
             enquiry["customerName"], enquiry["productName"])
    return ok(enquiry)


@bp.route("/api/enquiries/<enquiry_id>", methods=["PUT"])
@guarded("Failed to update enquiry")
@session_required
def api_enquiries_update(enquiry_id):
    """Overwrite status and notes. Notes left out of the body are cleared."""
    body = json_body()
    status = _validate_status(body.get("status"))
    values = ENQUIRY_FOLLOW_UP.from_wire(body)
    values["updated_at"] = utcnow_iso()
    row = db.update_row(TABLE, enquiry_id, values)
    if row is None:
        raise NotFound("Enquiry not found")
    log.info("Enquiry %s → %s", enquiry_id, status)
    return ok(ENQUIRY.to_wire(row))


@bp.route("/api/enquiries/<enquiry_id>", methods=["DELETE"])
@guarded("Failed to delete enquiry")
@session_required
def api_enquiries_delete(enquiry_id):
    if not db.delete_row(TABLE, enquiry_id):
        raise NotFound("Enquiry not found")
    return ok()
