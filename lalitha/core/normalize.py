"""
lalitha/core/normalize.py — Row ↔ Wire Mapping

Every resource is described by a Schema: an ordered list of Fields naming
the wire key (camelCase), the storage column (snake_case), a kind, and
whether it is required, nullable or writable. One pair of functions does all
the coercion that used to be copied per route:

    schema.to_wire(row)     stored row  → JSON-ready dict
    schema.from_wire(body)  request body → {column: value} for a write

Output rules:
    id         int → base-10 string
    text       None → "" when nullable
    id_list    [1, 3] (or its JSON text) → ["1", "3"]
    list/json  JSON text → decoded value
    int/float  None → field default
    bool       None → field default
    timestamp  stored ISO text, passed through

Input rules:
    text       "" / missing → None when nullable
    id         strict integer parse, bad or out-of-range value → None
    id_list    strict integer parse per entry, bad entries dropped
    int/float  "" / missing → default, unparseable or non-finite → BadRequest
    int        beyond the signed 64-bit range → BadRequest
    bool       missing → default, otherwise truthiness
"""

import re
import json
import math
from dataclasses import dataclass, field as dc_field
from datetime import datetime, timezone
from typing import Any

from lalitha.core.errors import BadRequest

_INT_RE = re.compile(r"^[+-]?\d+$")

# SQLite INTEGER is a signed 64-bit value.
SQLITE_INT_MIN = -2 ** 63
SQLITE_INT_MAX = 2 ** 63 - 1

KINDS = ("text", "int", "float", "bool", "id", "id_list", "list", "json", "timestamp")


def utcnow_iso() -> str:
    """Current UTC time as 2024-03-05T10:11:12.345Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def coerce_int(raw) -> int | None:
    """Strict integer parse. Returns None for anything that is not a whole number."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _INT_RE.match(raw.strip()):
        return int(raw.strip())
    return None


def parse_id(raw, resource: str) -> int:
    """Parse a path identifier. Raises BadRequest instead of guessing."""
    value = coerce_int(raw)
    if value is None:
        raise BadRequest(f"Invalid {resource} ID")
    return value


def fits_sqlite_int(value: int) -> bool:
    return SQLITE_INT_MIN <= value <= SQLITE_INT_MAX


def parse_int_list(values) -> list:
    """Coerce each entry to int, silently dropping the ones that don't parse."""
    if not isinstance(values, (list, tuple)):
        return []
    result = []
    for v in values:
        n = coerce_int(v)
        if n is not None:
            result.append(n)
    return result


def _coerce_number(raw, kind: str, name: str):
    if kind == "int":
        value = coerce_int(raw)
        if value is None and isinstance(raw, float) and raw.is_integer():
            value = int(raw)
        if value is None:
            raise BadRequest(f"{name} must be a whole number")
        if not fits_sqlite_int(value):
            raise BadRequest(f"{name} is out of range")
        return value
    if isinstance(raw, bool):
        raise BadRequest(f"{name} must be a number")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise BadRequest(f"{name} must be a number")
    if not math.isfinite(value):
        raise BadRequest(f"{name} must be a number")
    return value


def _decode_json(value, fallback):
    if value is None:
        return fallback
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return fallback
    return value


@dataclass(frozen=True)
class Field:
    name: str
    column: str
    kind: str = "text"
    required: bool = False
    nullable: bool = True
    default: Any = ""
    writable: bool = True

    def __post_init__(self):
        if self.kind not in KINDS:
            raise ValueError(f"unknown field kind {self.kind!r}")


@dataclass
class Schema:
    """Field list for one resource."""
    resource: str
    fields: list = dc_field(default_factory=list)
    # Stored as JSON text (relational tables) or native values (documents).
    json_columns: bool = True

    @property
    def writable(self) -> list:
        return [f for f in self.fields if f.writable]

    # ── Output ────────────────────────────────────────────────────────────
    def to_wire(self, row: dict) -> dict:
        out = {}
        for f in self.fields:
            out[f.name] = self._out(f, row.get(f.column))
        return out

    def _out(self, f: Field, value):
        if f.kind == "id":
            return str(value) if value is not None else ""
        if f.kind == "id_list":
            return [str(v) for v in _decode_json(value, []) or []]
        if f.kind == "list":
            return list(_decode_json(value, []) or [])
        if f.kind == "json":
            return _decode_json(value, f.default)
        if f.kind in ("int", "float"):
            if value is None:
                return f.default
            return int(value) if f.kind == "int" else float(value)
        if f.kind == "bool":
            return bool(value) if value is not None else f.default
        if value is None:
            return "" if f.nullable else f.default
        return value

    # ── Input ─────────────────────────────────────────────────────────────
    def missing(self, body: dict) -> list:
        """Wire names of required fields that are absent or blank."""
        gaps = []
        for f in self.fields:
            if not f.required:
                continue
            value = body.get(f.name)
            if value is None or (isinstance(value, str) and not value.strip()):
                gaps.append(f.name)
        return gaps

    def require(self, body: dict):
        gaps = self.missing(body)
        if gaps:
            raise BadRequest(f"Missing required fields: {', '.join(gaps)}")

    def from_wire(self, body: dict) -> dict:
        values = {}
        for f in self.writable:
            values[f.column] = self._in(f, body.get(f.name))
        return values

    def _in(self, f: Field, raw):
        if f.kind == "id":
            value = coerce_int(raw)
            return value if value is not None and fits_sqlite_int(value) else None
        if f.kind == "id_list":
            ids = parse_int_list(raw)
            return json.dumps(ids) if self.json_columns else ids
        if f.kind in ("list", "json"):
            if raw is None:
                raw = [] if f.kind == "list" else f.default
            return json.dumps(raw) if self.json_columns else raw
        if f.kind in ("int", "float"):
            if raw is None or raw == "":
                return f.default
            return _coerce_number(raw, f.kind, f.name)
        if f.kind == "bool":
            return f.default if raw is None else bool(raw)
        if raw is None or raw == "":
            return None if f.nullable else f.default
        return raw if isinstance(raw, str) else str(raw)
