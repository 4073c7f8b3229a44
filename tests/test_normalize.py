"""
tests/test_normalize.py — Schema mapping and strict parsing
"""
import json
import re

import pytest

from lalitha.core.errors import BadRequest
from lalitha.core.normalize import coerce_int, parse_id, parse_int_list, utcnow_iso
from lalitha.core.schemas import (BUSINESS_PROFILE, CATALOGUE, CUSTOMER, ENQUIRY,
                                  INVENTORY_ITEM, PURCHASE, SALE, SALE_ITEM, SUPPLIER,
                                  SUPPLIER_CONTACT)


# ═══════════════════════════════════════════════════════════════════════════════
# STRICT PARSING
# ═══════════════════════════════════════════════════════════════════════════════

class TestCoerceInt:

    @pytest.mark.parametrize("raw,expected", [
        ("42", 42), (" 7 ", 7), ("-3", -3), ("+5", 5), (12, 12),
    ])
    def test_whole_numbers(self, raw, expected):
        assert coerce_int(raw) == expected

    @pytest.mark.parametrize("raw", ["4.2", "abc", "12abc", "", None, True, 2.5, [1]])
    def test_rejects_everything_else(self, raw):
        assert coerce_int(raw) is None


class TestParseId:

    def test_valid(self):
        assert parse_id("17", "customer") == 17

    def test_invalid_never_becomes_zero(self):
        with pytest.raises(BadRequest) as e:
            parse_id("abc", "customer")
        assert e.value.message == "Invalid customer ID"
        assert e.value.status == 400

    def test_partial_number_rejected(self):
        with pytest.raises(BadRequest):
            parse_id("12abc", "supplier")


class TestParseIntList:

    def test_drops_bad_entries(self):
        assert parse_int_list(["1", "x", "3"]) == [1, 3]

    def test_non_list_is_empty(self):
        assert parse_int_list("1,2") == []
        assert parse_int_list(None) == []


def test_timestamp_format():
    assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", utcnow_iso())


# ═══════════════════════════════════════════════════════════════════════════════
# ROUND TRIP
# ═══════════════════════════════════════════════════════════════════════════════

ROUND_TRIP_CASES = [
    (CUSTOMER, {"name": "Anu", "phone": "98400", "email": "anu@x.in", "address": "Chennai"}),
    (SUPPLIER, {"name": "Sri Textiles", "phone": "1", "email": "", "address": "",
                "gstNumber": "33AAA", "gstPercentage": 5.0, "gstAmountRupees": 0.0,
                "gstType": "percentage", "contacts": []}),
    (CATALOGUE, {"name": "Wedding", "description": "Silk", "items": ["4", "9"]}),
    (ENQUIRY, {"customerName": "Ravi", "customerPhone": "9", "productId": "a1b2c3",
               "productName": "Saree", "productCode": "S-1", "fabricType": "Silk",
               "enquiryMethod": "whatsapp"}),
    (INVENTORY_ITEM, {"dressName": "Kurti", "dressType": "Kurti", "dressCode": "K1",
                      "sizes": ["S", "M"], "wholesalePrice": 100.0, "sellingPrice": 150.0,
                      "imageUrl": "https://img/x.jpg", "productImages": ["https://img/y.jpg"],
                      "fabricType": "Cotton", "supplierName": "", "supplierAddress": "",
                      "supplierPhone": ""}),
    (SALE_ITEM, {"inventoryId": "abc", "dressName": "Kurti", "dressType": "Kurti",
                 "dressCode": "K1", "size": "M", "quantity": 2, "purchasePrice": 100.0,
                 "sellingPrice": 150.0, "profit": 100.0}),
    (BUSINESS_PROFILE, {"businessName": "Lalitha", "ownerName": "L", "email": "a@b.c",
                        "phone": "1", "address": "x", "gstNumber": "",
                        "whatsappNumber": "2"}),
]


@pytest.mark.parametrize("schema,body", ROUND_TRIP_CASES, ids=[s.resource for s, _ in ROUND_TRIP_CASES])
def test_round_trip_writable_fields(schema, body):
    wire = schema.to_wire(schema.from_wire(body))
    for f in schema.writable:
        assert wire[f.name] == body[f.name], f.name


# ═══════════════════════════════════════════════════════════════════════════════
# FIELD RULES
# ═══════════════════════════════════════════════════════════════════════════════

class TestFieldRules:

    def test_nullable_text_stored_as_none(self):
        values = CUSTOMER.from_wire({"name": "A", "phone": "1", "email": ""})
        assert values["email"] is None
        assert values["address"] is None

    def test_none_comes_back_as_empty_string(self):
        wire = CUSTOMER.to_wire({"id": 3, "name": "A", "phone": "1", "email": None})
        assert wire["email"] == ""
        assert wire["id"] == "3"

    def test_catalogue_items_stored_as_json_ints(self):
        values = CATALOGUE.from_wire({"name": "c", "items": ["1", "x", "3"]})
        assert json.loads(values["items"]) == [1, 3]
        assert CATALOGUE.to_wire(values)["items"] == ["1", "3"]

    def test_stock_counters_not_writable(self):
        values = INVENTORY_ITEM.from_wire({"dressName": "x", "quantityIn": 50, "currentStock": 50})
        assert "quantity_in" not in values
        assert "current_stock" not in values

    def test_counters_default_to_zero(self):
        wire = INVENTORY_ITEM.to_wire({"id": "abc", "dress_name": "x"})
        assert wire["quantityIn"] == 0
        assert wire["currentStock"] == 0

    def test_numeric_strings_coerced(self):
        values = INVENTORY_ITEM.from_wire({"dressName": "x", "sellingPrice": "5999.50"})
        assert values["selling_price"] == 5999.5

    @pytest.mark.parametrize("raw", ["cheap", "NaN", "nan", "Infinity", "-inf", float("inf")])
    def test_bad_number_rejected(self, raw):
        with pytest.raises(BadRequest) as e:
            INVENTORY_ITEM.from_wire({"dressName": "x", "sellingPrice": raw})
        assert e.value.message == "sellingPrice must be a number"

    def test_int_beyond_storage_range_rejected(self):
        with pytest.raises(BadRequest) as e:
            PURCHASE.from_wire({"quantity": 2 ** 63})
        assert e.value.message == "quantity is out of range"

    def test_id_beyond_storage_range_dropped(self):
        assert PURCHASE.from_wire({"supplierId": "99999999999999999999"})["supplier_id"] is None

    def test_bool_field(self):
        assert SUPPLIER_CONTACT.from_wire({})["isPrimary"] is False
        assert SUPPLIER_CONTACT.from_wire({"isPrimary": 1})["isPrimary"] is True
        assert SUPPLIER_CONTACT.to_wire({"isPrimary": None})["isPrimary"] is False

    def test_enquiry_method_defaults_to_form(self):
        assert ENQUIRY.from_wire({})["enquiry_method"] == "form"

    def test_sale_items_kept_native_in_documents(self):
        values = SALE.from_wire({"date": "2024-01-01", "partyName": "p", "items": [{"a": 1}]})
        assert values["items"] == [{"a": 1}]


class TestRequire:

    def test_lists_missing_in_field_order(self):
        with pytest.raises(BadRequest) as e:
            CUSTOMER.require({"name": "   "})
        assert e.value.message == "Missing required fields: name, phone"

    def test_complete_body_passes(self):
        CUSTOMER.require({"name": "A", "phone": "1"})
