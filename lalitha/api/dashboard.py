#!/usr/bin/env python3
"""
Lalitha Garments Back-Office — Dashboard Blueprint

All routes hang off `bp`. Route modules in lalitha/api/modules/ import `bp`
from here and register themselves when this module is imported (bottom of
file), so app.py only has to register the one Blueprint.
"""
import time as _time
import logging

from flask import Blueprint, request

from lalitha.core.db import get_db_stats
from lalitha.api.envelope import guarded, ok

log = logging.getLogger("lalitha.api")

bp = Blueprint("dashboard", __name__)


# ── Request-level structured logging ────────────────────────────────────────
@bp.before_app_request
def _log_request_start():
    request._start_time = _time.time()


@bp.after_app_request
def _log_request_end(response):
    if hasattr(request, "_start_time"):
        duration_ms = round((_time.time() - request._start_time) * 1000, 1)
        if request.path not in ("/api/health",) and not request.path.startswith("/static"):
            log.info("%s %s → %d (%.0fms)",
                     request.method, request.path, response.status_code, duration_ms,
                     extra={"route": request.path, "method": request.method,
                            "status": response.status_code, "duration_ms": duration_ms})
    return response


@bp.route("/api/health")
@guarded("Health check failed")
def api_health():
    return ok({"status": "ok", "db": get_db_stats()})


# Route modules register on `bp` at import time.
from lalitha.api.modules import (  # noqa: E402,F401
    routes_admin,
    routes_auth,
    routes_business,
    routes_catalogues,
    routes_contacts,
    routes_enquiries,
    routes_inventory,
    routes_purchases,
    routes_sales,
    routes_upload,
)
