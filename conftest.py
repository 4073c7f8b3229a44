"""
Shared pytest fixtures for the Lalitha back-office test suite.

Every test gets its own SQLite file under tmp_path and a fresh Storage
instance, so nothing leaks between tests or into the project data/ folder.
"""
import os
import sys
import pytest

_PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

ADMIN_EMAIL = "owner@lalitha.test"
ADMIN_PASSWORD = "s3cret-pass"


# ── Temp data directory (per-test isolation) ──────────────────────────────────

@pytest.fixture(autouse=True)
def temp_data_dir(tmp_path, monkeypatch):
    """Point the database at an isolated tmp directory and reset process state."""
    data = tmp_path / "data"
    data.mkdir()

    from lalitha.core import db, paths
    from lalitha.core.security import _limiter
    from lalitha.core.storage import set_storage_for_test

    monkeypatch.setattr(paths, "DATA_DIR", str(data))
    monkeypatch.setattr(db, "DB_PATH", str(data / "lalitha.db"))
    monkeypatch.setenv("DISABLE_RATE_LIMIT", "true")
    monkeypatch.setenv("ADMIN_EMAIL", ADMIN_EMAIL)
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)
    for var in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET"):
        monkeypatch.delenv(var, raising=False)

    set_storage_for_test()
    _limiter.reset()
    db.init_db()
    return str(data)


# ── Flask test client ─────────────────────────────────────────────────────────

@pytest.fixture
def app(temp_data_dir):
    """Create Flask app configured for testing."""
    from app import create_app
    return create_app({"TESTING": True, "SECRET_KEY": "test-secret"})


@pytest.fixture
def anon_client(app):
    """Unauthenticated test client."""
    return app.test_client()


@pytest.fixture
def client(app):
    """Test client holding a signed admin_session cookie from a real login."""
    c = app.test_client()
    r = c.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.get_json()
    return c


@pytest.fixture
def cloudinary_env(monkeypatch):
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "demo-cloud")
    monkeypatch.setenv("CLOUDINARY_API_KEY", "123456789")
    monkeypatch.setenv("CLOUDINARY_API_SECRET", "abcdefghijklmnop")


# ── Sample data factories ─────────────────────────────────────────────────────

@pytest.fixture
def sample_item():
    """Inventory item as the admin UI posts it."""
    return {
        "dressName": "Kanjivaram Silk Saree",
        "dressType": "Saree",
        "dressCode": "KS-101",
        "sizes": ["Free"],
        "wholesalePrice": 4200,
        "sellingPrice": "5999.50",
        "imageUrl": "",
        "productImages": [],
        "fabricType": "Silk",
        "supplierName": "Sri Textiles",
        "supplierAddress": "12 Market Road, Kanchipuram",
        "supplierPhone": "9840000000",
    }


@pytest.fixture
def sample_sale():
    return {
        "date": "2024-03-14",
        "partyName": "Meena Stores",
        "billNumber": "B-0042",
        "items": [
            {"inventoryId": "abc123", "dressName": "Cotton Kurti", "dressType": "Kurti",
             "dressCode": "CK-7", "size": "M", "quantity": 3,
             "purchasePrice": 300, "sellingPrice": 450, "profit": 450},
        ],
        "totalAmount": 1350,
        "paymentMode": "UPI",
        "upiTransactionId": "UPI-998877",
    }


@pytest.fixture
def sample_profile():
    return {
        "businessName": "Lalitha Garments",
        "ownerName": "Lalitha R",
        "email": "shop@lalitha.test",
        "phone": "9000000001",
        "address": "4 Temple Street, Madurai",
        "gstNumber": "33ABCDE1234F1Z5",
        "whatsappNumber": "9000000001",
    }


@pytest.fixture
def sample_purchase():
    """Purchase order as the admin purchases form posts it."""
    return {
        "date": "2024-03-10",
        "supplierId": "",
        "supplierName": "Sri Textiles",
        "productName": "Cotton Kurti",
        "productImage": "https://res.cloudinary.com/demo/kurti.jpg",
        "sizes": ["S", "M"],
        "fabricType": "Khadi",
        "quantity": 10,
        "pricePerPiece": 250,
        "notes": "First lot",
    }
