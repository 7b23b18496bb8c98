"""Per-request correlation id, shared between middleware, handlers and logs."""

import uuid
from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def generate_request_id() -> str:
    """Return a fresh request id (uuid4 hex)."""
    return uuid.uuid4().hex


def get_request_id() -> str:
    return request_id_var.get("")


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)
