"""
Logging setup for the Lalitha back-office.

Call setup_logging() once from the app factory. Environment:

    LOG_LEVEL   root level name (default INFO)
    LOG_JSON    "1" / "true" / "yes" → JSON lines on the console as well
    LOG_FILE    "0" / "false" / "no" → no file log (default: on)

The console is human-readable unless LOG_JSON is set. The file log
(LOG_DIR/lalitha.log, 5 x 5MB) is always JSON so it can be grepped with jq.

Request lines carry `extra=` fields (see lalitha.api.dashboard) which both
formatters render: JSON as top-level keys, human format as a trailing
"[GET /api/sales 200 12ms]" tag.
"""
import os
import json
import logging
import logging.handlers
from datetime import datetime, timezone

from lalitha.core.paths import LOG_DIR

REQUEST_FIELDS = ("route", "method", "status", "duration_ms")

LOG_FILE_NAME = "lalitha.log"
LOG_FILE_BYTES = 5_000_000
LOG_FILE_BACKUPS = 5

QUIET_LOGGERS = ("urllib3", "werkzeug", "reportlab", "cloudinary")


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes")


def _isatty(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _record_time(record) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _request_fields(record) -> dict:
    return {k: getattr(record, k) for k in REQUEST_FIELDS if hasattr(record, k)}


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record):
        entry = {
            "ts": _record_time(record).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update(_request_fields(record))
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """Short coloured console lines: `10:42:07 I lalitha.api  message [tag]`."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[2m",
        logging.INFO: "",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, color: bool = True):
        super().__init__()
        self.color = color

    def format(self, record):
        stamp = _record_time(record).strftime("%H:%M:%S")
        line = f"{stamp} {record.levelname[0]} {record.name:<16} {record.getMessage()}"
        fields = _request_fields(record)
        if "route" in fields:
            line += " [{} {} {} {}ms]".format(fields.get("method", "-"), fields["route"],
                                              fields.get("status", "-"),
                                              fields.get("duration_ms", "-"))
        if record.exc_info and record.exc_info[0]:
            line += "\n" + self.formatException(record.exc_info)
        color = self.LEVEL_COLORS.get(record.levelno, "") if self.color else ""
        return f"{color}{line}{self.RESET}" if color else line


def _file_handler(log_dir: str):
    os.makedirs(log_dir, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE_NAME),
        maxBytes=LOG_FILE_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8",
    )
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(level=None, json_logs=None, log_dir=None):
    """Install console and file handlers on the root logger.

    Arguments override the LOG_LEVEL / LOG_JSON environment variables;
    `log_dir` defaults to DATA_DIR/logs. Safe to call again: existing root
    handlers are replaced.
    """
    level = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    if json_logs is None:
        json_logs = _env_flag("LOG_JSON", False)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler()
    console.setFormatter(JSONFormatter() if json_logs else HumanFormatter(color=_isatty(console.stream)))
    root.addHandler(console)

    if _env_flag("LOG_FILE", True):
        try:
            root.addHandler(_file_handler(log_dir or LOG_DIR))
        except OSError as e:
            root.warning("File logging disabled: %s", e)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("lalitha").info("Logging initialized: level=%s json=%s", level, json_logs)
