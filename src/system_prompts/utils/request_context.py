"""
Per-request context stored in contextvars.

The HTTP middleware records the request ID here so the JSON log formatter can
attach it to every record emitted while the request is handled.
"""

from contextvars import ContextVar

_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> None:
    """Record the ID of the request being handled (None clears it)."""
    _request_id_var.set(request_id)


def get_request_id() -> str | None:
    """Return the current request ID, or None outside a request."""
    return _request_id_var.get()
