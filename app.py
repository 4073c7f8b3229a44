#!/usr/bin/env python3
"""
Lalitha Garments Back-Office — Application Entry Point
Creates the Flask app and registers the dashboard Blueprint.

    python app.py                       # dev server on $PORT (5000)
    gunicorn 'app:create_app()'         # production
"""

import os
import logging

from flask import Flask

log = logging.getLogger("lalitha")


def create_app(config: dict = None):
    """Application factory.

    `config` is applied to app.config before anything else runs. With
    TESTING set, logging and the data directory are left to the caller.
    """
    app = Flask(__name__)
    app.config.update(config or {})

    from lalitha.core.secrets import get_key, startup_check
    app.secret_key = app.config.get("SECRET_KEY") or get_key("secret_key")

    if not app.testing:
        from logging_config import setup_logging
        from lalitha.core.paths import ensure_dirs, validate_paths
        setup_logging()
        ensure_dirs()
        check = validate_paths()
        for err in check["errors"]:
            log.error("PATHS: %s", err)

    # ── Persistent database init ──────────────────────────────────────────────
    from lalitha.core.db import DB_PATH, get_db_stats, init_db
    init_db()

    # Register the dashboard blueprint (all routes)
    from lalitha.api.dashboard import bp
    app.register_blueprint(bp)

    # ── Security middleware (route gate, headers) ─────────────────────────────
    from lalitha.core.security import init_security
    init_security(app)

    startup_check()
    stats = get_db_stats()
    log.info("DB: %s | customers=%d suppliers=%d purchases=%d enquiries=%d documents=%d",
             DB_PATH, stats.get("customers", 0), stats.get("suppliers", 0), stats.get("purchases", 0),
             stats.get("customer_enquiries", 0), stats.get("documents", 0))
    return app


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    create_app().run(host="0.0.0.0", port=port, debug=False)
