"""
Purpose:
- Error taxonomy for the lookup pipeline.
- Each error carries the HTTP status the API boundary maps it to.
"""

from __future__ import annotations


class MemeLookupError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(MemeLookupError):
    """Caller sent no usable query text."""
    status_code = 400


class NotFoundError(MemeLookupError):
    """Search produced nothing we could turn into an image."""
    status_code = 404


class UpstreamError(MemeLookupError):
    """A downstream HTTP dependency failed or answered with the wrong content."""
    status_code = 500


class InternalError(MemeLookupError):
    status_code = 500
