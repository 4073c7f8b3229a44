"""
lalitha/core/paths.py — Centralized Path Configuration

Single source of truth for directory paths. Every module imports from here
instead of computing its own DATA_DIR.

Set LALITHA_DATA_DIR to point the service at a persistent volume; otherwise
the git-ignored data/ folder at the project root is used.
"""

import os
import logging

log = logging.getLogger("lalitha.paths")

# ── Project Root ──────────────────────────────────────────────────────────────
_THIS_FILE = os.path.abspath(__file__)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(_THIS_FILE)))

_LOCAL_DATA_DIR = os.path.join(PROJECT_ROOT, "data")


def _resolve_data_dir() -> str:
    """Find the data directory. Priority: LALITHA_DATA_DIR env → project data/."""
    env_dir = os.environ.get("LALITHA_DATA_DIR", "")
    if env_dir:
        return env_dir
    return _LOCAL_DATA_DIR


DATA_DIR = _resolve_data_dir()
DB_PATH = os.path.join(DATA_DIR, "lalitha.db")
LOG_DIR = os.path.join(DATA_DIR, "logs")


def ensure_dirs():
    """Create DATA_DIR and LOG_DIR. Called once at app startup."""
    for d in (DATA_DIR, LOG_DIR):
        os.makedirs(d, exist_ok=True)


def validate_paths() -> dict:
    """Check that DATA_DIR exists and is writable.

    Returns:
        {"ok": bool, "errors": [str], "resolved": {name: path}}
    """
    result = {"ok": True, "errors": [],
              "resolved": {"DATA_DIR": DATA_DIR, "DB_PATH": DB_PATH}}
    test_file = os.path.join(DATA_DIR, ".write_test")
    try:
        with open(test_file, "w") as f:
            f.write("ok")
        os.remove(test_file)
    except OSError as e:
        result["errors"].append(f"DATA_DIR not writable: {e}")
        result["ok"] = False
    return result
