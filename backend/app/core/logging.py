from uuid import uuid4

import structlog

from mydays.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger", "bind_request_context"]


def bind_request_context(method: str, path: str, request_id: str | None = None) -> str:
    """Attach request details to every log line emitted while handling it."""
    request_id = request_id or uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)
    return request_id
