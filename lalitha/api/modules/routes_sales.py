# routes_sales.py
"""
Sales ledger and invoices.

A sale is one Storage document with its line items nested inside. Dates are
plain YYYY-MM-DD strings, so the year/month filter is a string match on the
date's prefix after zero-padding the month.
"""

import logging
from datetime import datetime

from flask import make_response, request

from lalitha.core.errors import BadRequest, NotFound
from lalitha.core.normalize import coerce_int
from lalitha.core.schemas import BUSINESS_PROFILE, SALE, SALE_ITEM
from lalitha.core.security import session_required
from lalitha.core.storage import get_storage
from lalitha.forms.invoice_generator import generate_invoice_pdf, invoice_filename
from lalitha.api.dashboard import bp
from lalitha.api.envelope import guarded, json_body, ok

log = logging.getLogger("lalitha.api")

COLLECTION = "sales"


def sale_to_wire(doc: dict) -> dict:
    sale = SALE.to_wire(doc)
    sale["items"] = [SALE_ITEM.to_wire(i) for i in sale["items"] if isinstance(i, dict)]
    return sale


def _filter_value(name: str, low: int, high: int) -> int | None:
    raw = request.args.get(name, "").strip()
    if not raw:
        return None
    value = coerce_int(raw)
    if value is None or not low <= value <= high:
        raise BadRequest(f"Invalid {name}")
    return value


def filter_sales(sales: list, year: int = None, month: int = None) -> list:
    """Sales matching year and/or month, newest date first."""
    picked = []
    for s in sales:
        date = s.get("date") or ""
        if year is not None and date[:4] != f"{year:04d}":
            continue
        if month is not None and date[5:7] != f"{month:02d}":
            continue
        picked.append(s)
    return sorted(picked, key=lambda s: s.get("date") or "", reverse=True)


@bp.route("/api/sales")
@guarded("Failed to fetch sales")
@session_required
def api_sales():
    """List sales. ?year=2024&month=03 (month may be unpadded)."""
    year = _filter_value("year", 1, 9999)
    month = _filter_value("month", 1, 12)
    sales = [sale_to_wire(d) for d in get_storage().list(COLLECTION)]
    return ok(filter_sales(sales, year, month))


@bp.route("/api/sales", methods=["POST"])
@guarded("Failed to add sale")
@session_required
def api_sales_add():
    body = json_body()
    SALE.require(body)
    values = SALE.from_wire(body)
    try:
        values["date"] = datetime.strptime(values["date"].strip()[:10], "%Y-%m-%d").strftime("%Y-%m-%d")
    except ValueError:
        raise BadRequest("Invalid date. Expected YYYY-MM-DD")
    items = body.get("items") or []
    if not isinstance(items, list):
        raise BadRequest("items must be a list")
    values["items"] = [SALE_ITEM.from_wire(i) for i in items if isinstance(i, dict)]

    doc = get_storage().add(COLLECTION, values)
    log.info("Sale recorded: id=%s bill=%s party=%s total=%.2f (%d items)",
             doc["id"], doc.get("bill_number", ""), doc["party_name"],
             doc.get("total_amount") or 0, len(values["items"]))
    return ok(sale_to_wire(doc))


@bp.route("/api/sales/<sale_id>/invoice")
@guarded("Failed to generate PDF")
@session_required
def api_sale_invoice(sale_id):
    """Invoice PDF for one sale, served inline."""
    store = get_storage()
    doc = store.get(COLLECTION, sale_id)
    if doc is None:
        raise NotFound("Sale not found")
    profile = store.get_singleton("business_profile")
    if profile is None:
        raise BadRequest("Business profile is not set up")

    sale = sale_to_wire(doc)
    pdf = generate_invoice_pdf(sale, BUSINESS_PROFILE.to_wire(profile))
    resp = make_response(pdf)
    resp.headers["Content-Type"] = "application/pdf"
    resp.headers["Content-Disposition"] = f'inline; filename="{invoice_filename(sale)}"'
    resp.headers["Cache-Control"] = "private, max-age=3600"
    return resp
