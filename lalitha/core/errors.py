"""
Request-level error types.

Raised anywhere below a route handler and turned into a JSON envelope by
lalitha.api.envelope.guarded. Anything else that escapes a handler is an
unexpected fault (500).
"""


class ApiError(Exception):
    """An error the caller can act on. `message` is safe to return."""
    status = 400

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class BadRequest(ApiError):
    status = 400


class Unauthorized(ApiError):
    status = 401


class NotFound(ApiError):
    status = 404
