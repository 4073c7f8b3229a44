"""
tests/test_purchases.py — Purchase orders and their inventory receipts
"""
import pytest

from lalitha.api.modules.routes_purchases import dress_code_for


def _create(client, url, body):
    r = client.post(url, json=body)
    assert r.status_code == 200, r.get_json()
    return r.get_json()["data"]


def _inventory(client):
    return client.get("/api/inventory").get_json()["data"]


# ═══════════════════════════════════════════════════════════════════════════════
# PURCHASE ORDERS
# ═══════════════════════════════════════════════════════════════════════════════

class TestPurchases:

    def test_create(self, client, sample_purchase):
        order = _create(client, "/api/purchases", sample_purchase)
        assert isinstance(order["id"], str)
        assert order["supplierId"] == ""
        assert order["sizes"] == ["S", "M"]
        assert order["pricePerPiece"] == 250.0
        assert order["totalAmount"] == 2500.0
        assert order["createdAt"].endswith("Z")

    def test_explicit_total_kept(self, client, sample_purchase):
        order = _create(client, "/api/purchases", {**sample_purchase, "totalAmount": 2300})
        assert order["totalAmount"] == 2300.0

    def test_list_latest_date_first(self, client, sample_purchase):
        older = _create(client, "/api/purchases", {**sample_purchase, "date": "2024-01-05"})
        newer = _create(client, "/api/purchases", {**sample_purchase, "date": "2024-02-05"})
        rows = client.get("/api/purchases").get_json()["data"]
        assert [r["id"] for r in rows] == [newer["id"], older["id"]]

    def test_missing_fields(self, client):
        r = client.post("/api/purchases", json={"date": "2024-03-10"})
        assert r.status_code == 400
        assert r.get_json()["message"] == \
            "Missing required fields: supplierName, productName, quantity, pricePerPiece"

    @pytest.mark.parametrize("patch, message", [
        ({"date": "10/03/2024"}, "Invalid date. Expected YYYY-MM-DD"),
        ({"quantity": 0}, "quantity must be at least 1"),
        ({"quantity": "ten"}, "quantity must be a whole number"),
        ({"pricePerPiece": -1}, "pricePerPiece cannot be negative"),
        ({"sizes": "S"}, "sizes must be a list"),
    ])
    def test_invalid_input(self, client, sample_purchase, patch, message):
        r = client.post("/api/purchases", json={**sample_purchase, **patch})
        assert r.status_code == 400
        assert r.get_json()["message"] == message
        assert _inventory(client) == []

    def test_delete(self, client, sample_purchase):
        order = _create(client, "/api/purchases", sample_purchase)
        assert client.delete(f"/api/purchases/{order['id']}").get_json() == {"success": True}
        r = client.delete(f"/api/purchases/{order['id']}")
        assert r.status_code == 404
        assert r.get_json()["message"] == "Purchase order not found"
        assert client.delete("/api/purchases/abc").get_json()["message"] == "Invalid purchase order ID"
        # Stock booked by the purchase stays.
        assert _inventory(client)[0]["currentStock"] == 10

    def test_requires_session(self, anon_client, sample_purchase):
        assert anon_client.get("/api/purchases").status_code == 401
        assert anon_client.post("/api/purchases", json=sample_purchase).status_code == 401
        assert anon_client.delete("/api/purchases/1").status_code == 401


# ═══════════════════════════════════════════════════════════════════════════════
# INVENTORY RECEIPT
# ═══════════════════════════════════════════════════════════════════════════════

class TestInventoryReceipt:

    def test_dress_code(self):
        assert dress_code_for("Cotton Kurti", "Khadi") == "COTTON_KURTI_KHADI"
        assert dress_code_for("Silk  Saree", "") == "SILK_SAREE_STANDARD"

    def test_new_item_created(self, client, sample_purchase):
        _create(client, "/api/purchases", sample_purchase)
        [item] = _inventory(client)
        assert item["dressName"] == "Cotton Kurti"
        assert item["dressType"] == "Custom"
        assert item["dressCode"] == "COTTON_KURTI_KHADI"
        assert item["sizes"] == ["S", "M"]
        assert item["wholesalePrice"] == 250.0
        assert item["sellingPrice"] == 500.0
        assert item["imageUrl"] == sample_purchase["productImage"]
        assert item["supplierName"] == "Sri Textiles"
        assert (item["quantityIn"], item["quantityOut"], item["currentStock"]) == (10, 0, 10)

    def test_existing_item_restocked(self, client, sample_purchase):
        _create(client, "/api/purchases", sample_purchase)
        _create(client, "/api/purchases", {**sample_purchase, "sizes": ["M", "L"],
                                           "quantity": 4, "pricePerPiece": 275.5})
        [item] = _inventory(client)
        assert item["sizes"] == ["S", "M", "L"]
        assert item["wholesalePrice"] == 275.5
        assert item["sellingPrice"] == 551.0
        assert (item["quantityIn"], item["currentStock"]) == (14, 14)

    def test_receipt_keeps_sold_count(self, client, sample_purchase):
        _create(client, "/api/purchases", sample_purchase)
        item_id = _inventory(client)[0]["id"]
        client.post(f"/api/inventory/{item_id}/stock", json={"type": "out", "quantity": 3})
        _create(client, "/api/purchases", {**sample_purchase, "quantity": 5})
        item = _inventory(client)[0]
        assert (item["quantityIn"], item["quantityOut"], item["currentStock"]) == (15, 3, 12)

    def test_other_fabric_is_separate_item(self, client, sample_purchase):
        _create(client, "/api/purchases", sample_purchase)
        _create(client, "/api/purchases", {**sample_purchase, "fabricType": "Linen"})
        codes = sorted(i["dressCode"] for i in _inventory(client))
        assert codes == ["COTTON_KURTI_KHADI", "COTTON_KURTI_LINEN"]
