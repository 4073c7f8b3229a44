"""
secrets.py — Centralized Secret Management

Single source of truth for credentials read from the environment.

Env vars:
  SECRET_KEY              — Flask secret, also signs the admin session cookie
  ADMIN_EMAIL             — Admin login email
  ADMIN_PASSWORD          — Admin login password
  CLOUDINARY_CLOUD_NAME   — Image host cloud name
  CLOUDINARY_API_KEY      — Image host API key
  CLOUDINARY_API_SECRET   — Image host API secret (signs uploads)

Security:
  - Values are never logged in full (masked to first 8 chars)
  - Sensitive entries only ever report set / not set
"""

import os
import logging

log = logging.getLogger("lalitha.secrets")

# ─── Secret Definitions ─────────────────────────────────────────────────────

_REGISTRY = {
    "secret_key": {
        "env": "SECRET_KEY",
        "required": True,
        "desc": "Flask secret key and session signing key",
        "users": ["app", "sessions"],
        "default": "lalitha-dev-secret",
        "sensitive": True,
    },
    "admin_email": {
        "env": "ADMIN_EMAIL",
        "required": True,
        "desc": "Admin login email",
        "users": ["auth"],
        "default": "admin@lalitha.local",
    },
    "admin_password": {
        "env": "ADMIN_PASSWORD",
        "required": True,
        "desc": "Admin login password",
        "users": ["auth"],
        "default": "changeme",
        "sensitive": True,
    },
    "cloudinary_cloud_name": {
        "env": "CLOUDINARY_CLOUD_NAME",
        "required": False,
        "desc": "Cloudinary cloud name",
        "users": ["upload"],
    },
    "cloudinary_api_key": {
        "env": "CLOUDINARY_API_KEY",
        "required": False,
        "desc": "Cloudinary API key",
        "users": ["upload"],
    },
    "cloudinary_api_secret": {
        "env": "CLOUDINARY_API_SECRET",
        "required": False,
        "desc": "Cloudinary API secret",
        "users": ["upload"],
        "sensitive": True,
    },
}


# ─── Public API ──────────────────────────────────────────────────────────────

def get_key(name: str) -> str:
    """Get a secret value by registry name. Returns empty string if not set."""
    entry = _REGISTRY.get(name)
    if not entry:
        log.warning("Unknown secret requested: %s", name)
        return ""

    val = os.environ.get(entry["env"], "")
    if not val and "default" in entry:
        val = entry["default"]
    return val


def mask(value: str) -> str:
    """Mask a secret for safe logging. Shows first 8 chars."""
    if not value:
        return "(not set)"
    if len(value) <= 12:
        return value[:4] + "****"
    return value[:8] + "****" + f"({len(value)} chars)"


def using_default(name: str) -> bool:
    entry = _REGISTRY.get(name, {})
    return "default" in entry and not os.environ.get(entry["env"])


def validate_all() -> dict:
    """Validate all secrets. Returns status report."""
    results = {}
    warnings = []
    for name, entry in _REGISTRY.items():
        val = get_key(name)
        is_set = bool(val)
        results[name] = {
            "set": is_set,
            "env": entry["env"],
            "desc": entry["desc"],
            "masked": mask(val) if not entry.get("sensitive") else ("set" if is_set else "not set"),
            "required": entry.get("required", False),
            "users": entry["users"],
        }
        if entry.get("required") and not is_set:
            warnings.append(f"REQUIRED secret missing: {entry['env']} ({entry['desc']})")
        if entry.get("sensitive") and using_default(name):
            warnings.append(f"{entry['env']} is using its development default")

    return {
        "secrets": results,
        "total": len(results),
        "set": sum(1 for r in results.values() if r["set"]),
        "missing": sum(1 for r in results.values() if not r["set"]),
        "warnings": warnings,
    }


def startup_check():
    """Run on startup. Logs warnings for missing or defaulted secrets."""
    report = validate_all()
    log.info("Secrets: %d/%d configured", report["set"], report["total"])
    for w in report["warnings"]:
        log.warning("SECRET: %s", w)
    return report
