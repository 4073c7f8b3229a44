"""
Security Middleware — Route Gate, Sessions, Rate Limiting
==========================================================

Route gate (before_request, /admin paths only):
- Looks at the presence of the `admin_session` cookie, nothing else
- No cookie on a protected admin page → redirect to /admin/login
- Cookie on /admin/login → redirect to /admin/dashboard
- The gate is a first-pass filter, not the security boundary

Sessions:
- Cookie value is a signed, timestamped token (itsdangerous)
- `session_required` verifies signature and age on every protected handler

Rate Limiting:
- In-memory token bucket per IP address
- 429 response when exceeded
"""

import os
import time
import logging
import functools
from collections import defaultdict
from threading import Lock

from flask import current_app, redirect, request
from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer

from lalitha.core.errors import Unauthorized

log = logging.getLogger("lalitha.security")

SESSION_COOKIE = "admin_session"
ADMIN_PREFIX = "/admin"
LOGIN_PATH = "/admin/login"
DASHBOARD_PATH = "/admin/dashboard"

ALLOW = "allow"
REDIRECT = "redirect"


# ═══════════════════════════════════════════════════════════════════════════════
# Route Gate
# ═══════════════════════════════════════════════════════════════════════════════

def is_admin_path(path: str) -> bool:
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/")


def gate_decision(path: str, has_session: bool) -> tuple:
    """Decide what to do with a request. Returns (action, location).

    | path                        | cookie | result               |
    | admin path other than login | no     | redirect → login     |
    | admin path other than login | yes    | allow                |
    | login path                  | yes    | redirect → dashboard |
    | login path                  | no     | allow                |
    | anything else               | -      | allow                |
    """
    if path == LOGIN_PATH:
        if has_session:
            return REDIRECT, DASHBOARD_PATH
        return ALLOW, None
    if is_admin_path(path) and not has_session:
        return REDIRECT, LOGIN_PATH
    return ALLOW, None


def admin_route_gate():
    """before_request hook. Cookie presence only; content is not checked here."""
    if not is_admin_path(request.path):
        return None
    has_session = bool(request.cookies.get(SESSION_COOKIE))
    action, location = gate_decision(request.path, has_session)
    if action == REDIRECT:
        log.debug("gate: %s → %s", request.path, location)
        return redirect(location)
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# Signed Sessions
# ═══════════════════════════════════════════════════════════════════════════════

def session_max_age() -> int:
    return int(os.environ.get("SESSION_MAX_AGE", 60 * 60 * 24 * 7))


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.secret_key, salt="admin-session")


def issue_session_token(email: str) -> str:
    return _serializer().dumps({"email": email})


def read_session_token(token: str) -> dict | None:
    """Verify a session token. Returns its payload, or None when invalid or expired."""
    if not token:
        return None
    try:
        return _serializer().loads(token, max_age=session_max_age())
    except SignatureExpired:
        log.info("Expired admin session presented from %s", request.remote_addr)
        return None
    except BadData:
        log.warning("Invalid admin session signature from %s", request.remote_addr)
        return None


def current_session() -> dict | None:
    return read_session_token(request.cookies.get(SESSION_COOKIE, ""))


def session_required(f):
    """Decorator: reject the request with 401 unless the session cookie verifies.

    Must sit inside `guarded` so the Unauthorized error becomes an envelope.
    """
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        if current_session() is None:
            raise Unauthorized("Authentication required")
        return f(*args, **kwargs)
    return wrapper


# ═══════════════════════════════════════════════════════════════════════════════
# Rate Limiting
# ═══════════════════════════════════════════════════════════════════════════════

class RateLimiter:
    """Simple in-memory rate limiter using token bucket algorithm."""

    def __init__(self):
        self._buckets = defaultdict(lambda: {"tokens": 60, "last_refill": time.time()})
        self._lock = Lock()

    def check(self, key: str, max_tokens: int = 60, refill_rate: float = 1.0) -> bool:
        """Check if request is allowed. Returns True if allowed, False if rate limited.

        Args:
            key: Unique key for the bucket (usually IP + endpoint group)
            max_tokens: Maximum burst capacity
            refill_rate: Tokens added per second
        """
        with self._lock:
            bucket = self._buckets[key]
            now = time.time()
            elapsed = now - bucket["last_refill"]

            bucket["tokens"] = min(max_tokens, bucket["tokens"] + elapsed * refill_rate)
            bucket["last_refill"] = now

            if bucket["tokens"] >= 1:
                bucket["tokens"] -= 1
                return True
            return False

    def reset(self):
        with self._lock:
            self._buckets.clear()


_limiter = RateLimiter()


RATE_LIMITS = {
    "default":     {"max_tokens": 60,  "refill_rate": 2.0},   # 120/min
    "auth":        {"max_tokens": 5,   "refill_rate": 0.1},   # 6/min (login attempts)
    "upload":      {"max_tokens": 10,  "refill_rate": 0.2},   # 12/min
}


def rate_limit(tier: str = "default"):
    """Decorator to apply rate limiting to a route."""
    def decorator(f):
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            if os.environ.get("DISABLE_RATE_LIMIT", "").lower() == "true":
                return f(*args, **kwargs)

            ip = request.remote_addr or "unknown"
            key = f"{ip}:{tier}"
            limits = RATE_LIMITS.get(tier, RATE_LIMITS["default"])

            if not _limiter.check(key, **limits):
                log.warning("Rate limit exceeded: %s tier=%s", ip, tier)
                from lalitha.api.envelope import fail
                return fail("Rate limit exceeded. Please try again shortly.", 429)

            return f(*args, **kwargs)
        return wrapper
    return decorator


# ═══════════════════════════════════════════════════════════════════════════════
# Security Headers Middleware
# ═══════════════════════════════════════════════════════════════════════════════

def add_security_headers(response):
    """Add security headers to every response."""
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "SAMEORIGIN"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if not response.headers.get("Cache-Control"):
        response.headers["Cache-Control"] = "no-store"
    return response


def init_security(app):
    """Install the route gate and security headers on the Flask app."""
    app.before_request(admin_route_gate)
    app.after_request(add_security_headers)
    log.info("Security middleware initialized: admin route gate, rate limiting, security headers")
