# routes_auth.py
"""Admin login / logout / session check."""

import hmac
import logging

from flask import current_app, jsonify

from lalitha.core.errors import Unauthorized
from lalitha.core.secrets import get_key
from lalitha.core.security import (SESSION_COOKIE, current_session, issue_session_token,
                                   rate_limit, session_max_age)
from lalitha.api.dashboard import bp
from lalitha.api.envelope import guarded, json_body, ok

log = logging.getLogger("lalitha.auth")


def check_credentials(email: str, password: str) -> bool:
    email_ok = hmac.compare_digest((email or "").strip().lower(),
                                   get_key("admin_email").strip().lower())
    password_ok = hmac.compare_digest(password or "", get_key("admin_password"))
    return email_ok and password_ok


@bp.route("/api/auth/login", methods=["POST"])
@rate_limit("auth")
@guarded("Server error")
def api_auth_login():
    body = json_body()
    email = str(body.get("email") or "")
    if not check_credentials(email, str(body.get("password") or "")):
        log.warning("Failed admin login for %r", email)
        raise Unauthorized("Invalid credentials")

    resp, status = ok({"email": email})
    resp.set_cookie(
        SESSION_COOKIE, issue_session_token(email),
        max_age=session_max_age(),
        httponly=True,
        samesite="Lax",
        secure=not (current_app.debug or current_app.testing),
    )
    log.info("Admin login: %s", email)
    return resp, status


@bp.route("/api/auth/logout", methods=["POST"])
def api_auth_logout():
    resp, status = ok()
    resp.delete_cookie(SESSION_COOKIE)
    return resp, status


@bp.route("/api/auth/check")
def api_auth_check():
    session = current_session()
    if session is None:
        return jsonify({"authenticated": False}), 401
    return jsonify({"authenticated": True, "email": session.get("email", "")})
