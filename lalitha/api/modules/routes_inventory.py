# routes_inventory.py
"""
Inventory items and stock movements.

Items are Storage documents with opaque ids. The three stock counters are
never written by the CRUD routes; they only change through
POST /api/inventory/<id>/stock, which keeps

    current_stock == quantity_in - quantity_out,  both counters >= 0
"""

import logging

from lalitha.core.errors import BadRequest, NotFound
from lalitha.core.normalize import coerce_int
from lalitha.core.schemas import INVENTORY_ITEM, STOCK_TYPES
from lalitha.core.security import session_required
from lalitha.api.dashboard import bp
from lalitha.api.envelope import guarded, json_body, ok
from lalitha.api.resources import DocumentResource, register_crud

log = logging.getLogger("lalitha.api")

COLLECTION = "inventory"

inventory = DocumentResource("inventory item", "inventory", COLLECTION, INVENTORY_ITEM,
                             not_found="Item not found")

register_crud(bp, "/api/inventory", inventory, public_read=True)


def apply_stock_movement(counters: dict, movement: str, quantity: int) -> dict:
    """Return new {quantity_in, quantity_out, current_stock} after a movement.

    Raises BadRequest for an unknown type or a movement the counters can't absorb.
    """
    q_in = counters.get("quantity_in") or 0
    q_out = counters.get("quantity_out") or 0
    stock = q_in - q_out

    if movement == "set":
        q_in = quantity + q_out
    elif movement == "in":
        q_in += quantity
    elif movement == "remove-in":
        if q_in < quantity:
            raise BadRequest(f"Cannot remove more than current quantity in ({q_in}).")
        q_in -= quantity
    elif movement == "out":
        if stock < quantity:
            raise BadRequest("Insufficient stock. Cannot remove more than available.")
        q_out += quantity
    elif movement == "remove-out":
        if q_out <= 0:
            raise BadRequest(f"Cannot decrease sold quantity. Current sold quantity is {q_out}.")
        # Reversing more than was sold clamps at zero.
        q_out -= min(quantity, q_out)
    elif movement == "add-stock":
        q_in += quantity
    elif movement == "remove-stock":
        if stock < quantity:
            raise BadRequest(f"Cannot remove more than current stock ({stock}).")
        q_in -= quantity
    else:
        raise BadRequest("Invalid stock type. Must be one of: " + ", ".join(STOCK_TYPES))

    if q_in < 0:
        raise BadRequest("Invalid operation. Quantity In cannot be negative.")
    if q_in - q_out < 0:
        raise BadRequest("Invalid operation. Current stock cannot be negative.")
    return {"quantity_in": q_in, "quantity_out": q_out, "current_stock": q_in - q_out}


@bp.route("/api/inventory/<item_id>/stock", methods=["POST"])
@guarded("Failed to update stock")
@session_required
def api_inventory_stock(item_id):
    """Record a stock movement: {"type": "in" | "out" | ..., "quantity": n}."""
    body = json_body()
    quantity = coerce_int(body.get("quantity"))
    if quantity is None or quantity < 0:
        raise BadRequest("Invalid quantity. Quantity must be a non-negative whole number.")
    movement = body.get("type")
    if movement not in STOCK_TYPES:
        raise BadRequest("Invalid stock type. Must be one of: " + ", ".join(STOCK_TYPES))

    def mutate(current):
        return {**current, **apply_stock_movement(current, movement, quantity)}

    doc = inventory.store.update(COLLECTION, item_id, mutate)
    if doc is None:
        raise NotFound("Item not found")
    log.info("Stock %s %d on %s → in=%d out=%d stock=%d", movement, quantity, item_id,
             doc["quantity_in"], doc["quantity_out"], doc["current_stock"])
    return ok({
        "id": doc["id"],
        "quantityIn": doc["quantity_in"],
        "quantityOut": doc["quantity_out"],
        "currentStock": doc["current_stock"],
    })
