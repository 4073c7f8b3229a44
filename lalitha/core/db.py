"""
lalitha/core/db.py — Persistent SQLite Database Layer

One SQLite file (DATA_DIR/lalitha.db) holds every resource:
  customers           — retail customers
  suppliers           — fabric and garment suppliers, GST terms and contacts
  purchases           — purchase orders received from suppliers
  catalogues          — named lists of inventory item ids (JSON array)
  customer_enquiries  — storefront enquiries with a follow-up status
  documents           — key/value bodies used by lalitha.core.storage
                        (inventory, sales, business profile)

Every helper issues exactly one parameterized statement (plus a read-back of
the touched row) inside a single connection, so each call is atomic.
Table and column names are never taken from request data.
"""

import os
import sqlite3
import logging
import threading
from contextlib import contextmanager

from lalitha.core import paths

log = logging.getLogger("lalitha.db")

DB_PATH = paths.DB_PATH

_db_lock = threading.Lock()


# ── Connection factory ────────────────────────────────────────────────────────
@contextmanager
def get_db():
    """Thread-safe SQLite connection with WAL mode for multi-worker gunicorn."""
    with _db_lock:
        conn = sqlite3.connect(DB_PATH, timeout=30, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA synchronous=NORMAL")
        conn.execute("PRAGMA foreign_keys=ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()


# ── Schema ────────────────────────────────────────────────────────────────────
SCHEMA = """
CREATE TABLE IF NOT EXISTS customers (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    name            TEXT NOT NULL,
    phone           TEXT NOT NULL,
    email           TEXT,
    address         TEXT,
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_customers_created ON customers(created_at);

CREATE TABLE IF NOT EXISTS suppliers (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    name            TEXT NOT NULL,
    phone           TEXT NOT NULL,
    email           TEXT,
    address         TEXT,
    gst_number      TEXT,
    gst_percentage  REAL NOT NULL DEFAULT 0,
    gst_amount_rupees REAL NOT NULL DEFAULT 0,
    gst_type        TEXT NOT NULL DEFAULT 'percentage',  -- percentage|rupees
    contacts        TEXT NOT NULL DEFAULT '[]',   -- JSON array of contact objects
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_suppliers_created ON suppliers(created_at);

CREATE TABLE IF NOT EXISTS purchases (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    date            TEXT NOT NULL,                -- YYYY-MM-DD
    supplier_id     INTEGER,
    supplier_name   TEXT NOT NULL,
    product_name    TEXT NOT NULL,
    product_image   TEXT,
    sizes           TEXT NOT NULL DEFAULT '[]',   -- JSON array of size labels
    fabric_type     TEXT,
    quantity        INTEGER NOT NULL DEFAULT 0,
    price_per_piece REAL NOT NULL DEFAULT 0,
    total_amount    REAL NOT NULL DEFAULT 0,
    notes           TEXT,
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_purchases_date ON purchases(date);

CREATE TABLE IF NOT EXISTS catalogues (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    name            TEXT NOT NULL,
    description     TEXT,
    items           TEXT NOT NULL DEFAULT '[]',   -- JSON array of integer ids
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS customer_enquiries (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    customer_name   TEXT NOT NULL,
    customer_phone  TEXT NOT NULL,
    product_id      TEXT,                         -- inventory document id
    product_name    TEXT NOT NULL,
    product_code    TEXT,
    fabric_type     TEXT,
    enquiry_method  TEXT NOT NULL DEFAULT 'form',
    status          TEXT NOT NULL DEFAULT 'pending',  -- pending|contacted|resolved|closed
    notes           TEXT,
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_enquiries_status ON customer_enquiries(status);

CREATE TABLE IF NOT EXISTS documents (
    collection      TEXT NOT NULL,
    id              TEXT NOT NULL,
    body            TEXT NOT NULL,                -- JSON object
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL,
    PRIMARY KEY (collection, id)
);

CREATE INDEX IF NOT EXISTS idx_documents_created ON documents(collection, created_at);
"""

TABLES = ("customers", "suppliers", "purchases", "catalogues", "customer_enquiries", "documents")


def init_db():
    """Create all tables if they don't exist. Safe to call multiple times."""
    os.makedirs(os.path.dirname(DB_PATH), exist_ok=True)
    with get_db() as conn:
        conn.executescript(SCHEMA)
    log.info("DB initialized at %s", DB_PATH)
    return True


# ── Generic statements ────────────────────────────────────────────────────────
def fetch_all(sql: str, params=()) -> list:
    with get_db() as conn:
        rows = conn.execute(sql, params).fetchall()
    return [dict(r) for r in rows]


def fetch_one(sql: str, params=()) -> dict | None:
    with get_db() as conn:
        row = conn.execute(sql, params).fetchone()
    return dict(row) if row else None


def execute(sql: str, params=()) -> int:
    """Run a write statement. Returns the number of rows touched."""
    with get_db() as conn:
        cur = conn.execute(sql, params)
        return cur.rowcount


# ── Row operations ────────────────────────────────────────────────────────────
def list_rows(table: str, where: dict = None,
              order_by: str = "created_at DESC, id DESC") -> list:
    """All rows of a table, newest first. `where` is an exact-match filter."""
    conditions = []
    params = []
    for column, value in (where or {}).items():
        conditions.append(f"{column}=?")
        params.append(value)
    clause = "WHERE " + " AND ".join(conditions) if conditions else ""
    return fetch_all(
        f"SELECT * FROM {table} {clause} ORDER BY {order_by}",
        params)


def insert_row(table: str, values: dict) -> dict:
    """Insert one row and return it as stored."""
    columns = list(values)
    placeholders = ",".join("?" for _ in columns)
    with get_db() as conn:
        cur = conn.execute(
            f"INSERT INTO {table} ({','.join(columns)}) VALUES ({placeholders})",
            [values[c] for c in columns])
        row = conn.execute(f"SELECT * FROM {table} WHERE id=?",
                           (cur.lastrowid,)).fetchone()
    return dict(row)


def update_row(table: str, row_id, values: dict) -> dict | None:
    """Overwrite the given columns of one row. None when no row matches."""
    columns = list(values)
    assignments = ", ".join(f"{c}=?" for c in columns)
    with get_db() as conn:
        cur = conn.execute(
            f"UPDATE {table} SET {assignments} WHERE id=?",
            [values[c] for c in columns] + [row_id])
        if cur.rowcount == 0:
            return None
        row = conn.execute(f"SELECT * FROM {table} WHERE id=?",
                           (row_id,)).fetchone()
    return dict(row) if row else None


def delete_row(table: str, row_id) -> bool:
    """Delete one row. False when no row matches."""
    return execute(f"DELETE FROM {table} WHERE id=?", (row_id,)) > 0


def get_db_stats() -> dict:
    """Row counts per table, for the startup log and /api/health."""
    stats = {}
    with get_db() as conn:
        for table in TABLES:
            try:
                stats[table] = conn.execute(
                    f"SELECT COUNT(*) FROM {table}").fetchone()[0]
            except sqlite3.OperationalError:
                stats[table] = 0
    return stats
