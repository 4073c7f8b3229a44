"""
JSON response envelope shared by every API route.

    success:  {"success": true, "data": <resource | list | null>}
    delete:   {"success": true}
    failure:  {"success": false, "message": "<safe text>"}
"""

import logging
import functools

from flask import jsonify, request

from lalitha.core.errors import ApiError, BadRequest, NotFound, Unauthorized  # noqa: F401

log = logging.getLogger("lalitha.api")

_NO_DATA = object()


def ok(data=_NO_DATA, status: int = 200):
    if data is _NO_DATA:
        return jsonify({"success": True}), status
    return jsonify({"success": True, "data": data}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    """The request's JSON object. Raises BadRequest for anything else."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object")
    return body


def guarded(failure_message: str):
    """Handler boundary: ApiError → its envelope, anything else → logged 500.

    The 500 body only carries `failure_message`; the exception stays in the log.
    """
    def decorator(f):
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ApiError as e:
                return fail(e.message, e.status)
            except Exception:
                log.exception("%s (%s %s)", failure_message, request.method, request.path)
                return fail(failure_message, 500)
        return wrapper
    return decorator
