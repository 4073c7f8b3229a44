# routes_purchases.py
"""
Purchase orders received from suppliers.

Recording a purchase also books the goods into inventory. The inventory item
is keyed by a dress code built from product and fabric

    "Cotton Kurti" + "Khadi"  →  COTTON_KURTI_KHADI

An existing item gets the purchase sizes merged in, its prices reset from the
purchase (selling = 2 × price per piece) and its stock raised by the purchase
quantity. Otherwise a new item of type "Custom" is created. Deleting a
purchase order leaves inventory as it is.
"""

import re
import json
import logging
from datetime import datetime

from lalitha.core.errors import BadRequest
from lalitha.core.schemas import INVENTORY_ITEM, PURCHASE
from lalitha.core.security import session_required
from lalitha.core.storage import get_storage
from lalitha.api.dashboard import bp
from lalitha.api.envelope import guarded, json_body, ok
from lalitha.api.resources import SqlResource
from lalitha.api.modules.routes_inventory import COLLECTION as INVENTORY, apply_stock_movement

log = logging.getLogger("lalitha.api")

MARKUP = 2


def dress_code_for(product_name: str, fabric_type: str = None) -> str:
    return re.sub(r"\s+", "_", f"{product_name}_{fabric_type or 'standard'}").upper()


class PurchaseResource(SqlResource):

    order_by = "date DESC, created_at DESC, id DESC"

    def values(self, body: dict) -> dict:
        values = super().values(body)
        try:
            values["date"] = datetime.strptime(values["date"].strip()[:10], "%Y-%m-%d").strftime("%Y-%m-%d")
        except ValueError:
            raise BadRequest("Invalid date. Expected YYYY-MM-DD")
        if values["quantity"] < 1:
            raise BadRequest("quantity must be at least 1")
        if values["price_per_piece"] < 0:
            raise BadRequest("pricePerPiece cannot be negative")
        sizes = body.get("sizes") or []
        if not isinstance(sizes, list):
            raise BadRequest("sizes must be a list")
        values["sizes"] = json.dumps([str(s) for s in sizes])
        if not values["total_amount"]:
            values["total_amount"] = round(values["quantity"] * values["price_per_piece"], 2)
        return values


purchases = PurchaseResource("purchase order", "purchases", "purchases", PURCHASE)


def receive_into_inventory(order: dict) -> tuple:
    """Book a wire-shaped purchase order into inventory. Returns (item, created)."""
    code = dress_code_for(order["productName"], order["fabricType"])
    price = order["pricePerPiece"]
    selling = round(price * MARKUP, 2)
    quantity = order["quantity"]

    def mutate(item):
        merged = list(item.get("sizes") or [])
        merged += [s for s in order["sizes"] if s not in merged]
        updated = {
            **item,
            "sizes": merged,
            "wholesale_price": price,
            "selling_price": selling,
            "fabric_type": order["fabricType"] or item.get("fabric_type"),
            "supplier_name": order["supplierName"] or item.get("supplier_name"),
        }
        updated.update(apply_stock_movement(item, "in", quantity))
        return updated

    def create():
        item = INVENTORY_ITEM.from_wire({
            "dressName": order["productName"],
            "dressType": "Custom",
            "dressCode": code,
            "sizes": order["sizes"],
            "wholesalePrice": price,
            "sellingPrice": selling,
            "imageUrl": order["productImage"],
            "fabricType": order["fabricType"],
            "supplierName": order["supplierName"],
        })
        item.update(apply_stock_movement({}, "in", quantity))
        return item

    return get_storage().upsert(
        INVENTORY, lambda item: item.get("dress_code") == code, mutate, create)


@bp.route("/api/purchases")
@guarded("Failed to fetch purchase orders")
@session_required
def api_purchases():
    """List purchase orders, latest purchase date first."""
    return ok(purchases.list())


@bp.route("/api/purchases", methods=["POST"])
@guarded("Failed to add purchase order")
@session_required
def api_purchases_add():
    order = purchases.create(json_body())
    item, created = receive_into_inventory(order)
    log.info("Purchase %s booked %d x %s into inventory %s (%s)",
             order["id"], order["quantity"], item["dress_code"], item["id"],
             "new item" if created else "restocked")
    return ok(order)


@bp.route("/api/purchases/<purchase_id>", methods=["DELETE"])
@guarded("Failed to delete purchase order")
@session_required
def api_purchases_delete(purchase_id):
    purchases.delete(purchase_id)
    return ok()
