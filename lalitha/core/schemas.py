"""Field schemas for every resource. See lalitha.core.normalize for the rules."""

from lalitha.core.normalize import Field, Schema

ENQUIRY_STATUSES = ("pending", "contacted", "resolved", "closed")

STOCK_TYPES = ("in", "remove-in", "out", "remove-out", "add-stock", "remove-stock", "set")

GST_TYPES = ("percentage", "rupees")


def _stamps():
    return [
        Field("createdAt", "created_at", "timestamp", writable=False),
        Field("updatedAt", "updated_at", "timestamp", writable=False),
    ]


# ── Relational resources ──────────────────────────────────────────────────────

CUSTOMER = Schema("customer", [
    Field("id", "id", "id", writable=False),
    Field("name", "name", required=True, nullable=False),
    Field("phone", "phone", required=True, nullable=False),
    Field("email", "email"),
    Field("address", "address"),
] + _stamps())

SUPPLIER = Schema("supplier", [
    Field("id", "id", "id", writable=False),
    Field("name", "name", required=True, nullable=False),
    Field("phone", "phone", required=True, nullable=False),
    Field("email", "email"),
    Field("address", "address"),
    Field("gstNumber", "gst_number"),
    Field("gstPercentage", "gst_percentage", "float", default=0.0),
    Field("gstAmountRupees", "gst_amount_rupees", "float", default=0.0),
    Field("gstType", "gst_type", nullable=False, default="percentage"),
    Field("contacts", "contacts", "list"),
] + _stamps())

# Entries of SUPPLIER.contacts, stored inline on the supplier row.
SUPPLIER_CONTACT = Schema("supplier contact", [
    Field("contactName", "contactName", required=True, nullable=False),
    Field("phone", "phone", required=True, nullable=False),
    Field("whatsappNumber", "whatsappNumber"),
    Field("isPrimary", "isPrimary", "bool", default=False),
], json_columns=False)

PURCHASE = Schema("purchase order", [
    Field("id", "id", "id", writable=False),
    Field("date", "date", required=True, nullable=False),
    Field("supplierId", "supplier_id", "id"),
    Field("supplierName", "supplier_name", required=True, nullable=False),
    Field("productName", "product_name", required=True, nullable=False),
    Field("productImage", "product_image"),
    Field("sizes", "sizes", "list"),
    Field("fabricType", "fabric_type"),
    Field("quantity", "quantity", "int", required=True, default=0),
    Field("pricePerPiece", "price_per_piece", "float", required=True, default=0.0),
    Field("totalAmount", "total_amount", "float", default=0.0),
    Field("notes", "notes"),
] + _stamps())

CATALOGUE = Schema("catalogue", [
    Field("id", "id", "id", writable=False),
    Field("name", "name", required=True, nullable=False),
    Field("description", "description"),
    Field("items", "items", "id_list"),
] + _stamps())

ENQUIRY = Schema("enquiry", [
    Field("id", "id", "id", writable=False),
    Field("customerName", "customer_name", required=True, nullable=False),
    Field("customerPhone", "customer_phone", required=True, nullable=False),
    Field("productId", "product_id"),
    Field("productName", "product_name", required=True, nullable=False),
    Field("productCode", "product_code"),
    Field("fabricType", "fabric_type"),
    Field("enquiryMethod", "enquiry_method", nullable=False, default="form"),
    Field("status", "status", writable=False),
    Field("notes", "notes", writable=False),
] + _stamps())

# Body of PUT /api/enquiries/<id>.
ENQUIRY_FOLLOW_UP = Schema("enquiry", [
    Field("status", "status", nullable=False),
    Field("notes", "notes"),
])

# ── Document resources (lalitha.core.storage) ─────────────────────────────────

INVENTORY_ITEM = Schema("inventory", [
    Field("id", "id", writable=False),
    Field("dressName", "dress_name", required=True, nullable=False),
    Field("dressType", "dress_type", nullable=False),
    Field("dressCode", "dress_code", nullable=False),
    Field("sizes", "sizes", "list"),
    Field("wholesalePrice", "wholesale_price", "float", default=0.0),
    Field("sellingPrice", "selling_price", "float", default=0.0),
    Field("imageUrl", "image_url"),
    Field("productImages", "product_images", "list"),
    Field("fabricType", "fabric_type"),
    Field("supplierName", "supplier_name"),
    Field("supplierAddress", "supplier_address"),
    Field("supplierPhone", "supplier_phone"),
    # Stock counters only move through POST /api/inventory/<id>/stock.
    Field("quantityIn", "quantity_in", "int", default=0, writable=False),
    Field("quantityOut", "quantity_out", "int", default=0, writable=False),
    Field("currentStock", "current_stock", "int", default=0, writable=False),
] + _stamps(), json_columns=False)

SALE_ITEM = Schema("sale item", [
    Field("inventoryId", "inventory_id"),
    Field("dressName", "dress_name", nullable=False),
    Field("dressType", "dress_type", nullable=False),
    Field("dressCode", "dress_code", nullable=False),
    Field("size", "size", nullable=False),
    Field("quantity", "quantity", "int", default=0),
    Field("purchasePrice", "purchase_price", "float", default=0.0),
    Field("sellingPrice", "selling_price", "float", default=0.0),
    Field("profit", "profit", "float", default=0.0),
], json_columns=False)

SALE = Schema("sale", [
    Field("id", "id", writable=False),
    Field("date", "date", required=True, nullable=False),
    Field("partyName", "party_name", required=True, nullable=False),
    Field("customerId", "customer_id"),
    Field("billNumber", "bill_number", nullable=False),
    Field("items", "items", "list"),
    Field("totalAmount", "total_amount", "float", default=0.0),
    Field("paymentMode", "payment_mode", nullable=False),
    Field("upiTransactionId", "upi_transaction_id"),
    Field("createdAt", "created_at", "timestamp", writable=False),
], json_columns=False)

BUSINESS_PROFILE = Schema("business profile", [
    Field("businessName", "business_name", nullable=False),
    Field("ownerName", "owner_name", nullable=False),
    Field("email", "email", nullable=False),
    Field("phone", "phone", nullable=False),
    Field("address", "address", nullable=False),
    Field("gstNumber", "gst_number"),
    Field("whatsappNumber", "whatsapp_number", nullable=False),
], json_columns=False)
