"""
Structured logging for the bank service.

Every line is one JSON object carrying:
- timestamp: ISO 8601, UTC
- level / logger: severity and emitting module
- event: snake_case event name (first positional argument)
- request_id: bound by the HTTP middleware for the lifetime of a request

Request-scoped fields are stored with structlog's contextvars helpers, so
they follow the request into the threadpool that runs the route handlers.
"""
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog

_SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def configure_logging(level: str = "INFO") -> None:
    """Route structlog through stdlib logging and render JSON lines."""
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level.upper())

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.processors.JSONRenderer()],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    return str(uuid.uuid4())


def set_request_context(request_id: str) -> None:
    """Attach request_id to every log line until the context is cleared."""
    structlog.contextvars.bind_contextvars(request_id=request_id)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


@contextmanager
def timed_operation(
    event: str,
    logger: Optional[structlog.stdlib.BoundLogger] = None,
    **fields: Any,
) -> Iterator[dict[str, Any]]:
    """
    Log `<event>_completed` or `<event>_failed` with duration_ms.

    Yields a dict; keys added to it inside the block are logged with the
    outcome. Exceptions are logged and re-raised.
    """
    log = logger or get_logger()
    extra: dict[str, Any] = {}
    start = time.perf_counter()
    try:
        yield extra
    except Exception as e:
        log.error(
            f"{event}_failed",
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            error=str(e),
            **fields,
        )
        raise
    log.info(
        f"{event}_completed",
        duration_ms=round((time.perf_counter() - start) * 1000, 2),
        **fields,
        **extra,
    )


def log_transaction(
    logger: structlog.stdlib.BoundLogger,
    kind: str,
    amount: Any,
    accepted: bool,
    reason: Optional[str] = None,
    balance: Optional[float] = None,
) -> None:
    """Log a deposit/withdrawal outcome as `<kind>_accepted` or `<kind>_rejected`."""
    fields: dict[str, Any] = {
        "kind": kind,
        "amount": amount,
        "outcome": "accepted" if accepted else "rejected",
    }
    if reason:
        fields["reason"] = reason
    if balance is not None:
        fields["balance"] = balance

    if accepted:
        logger.info(f"{kind}_accepted", **fields)
    else:
        logger.warning(f"{kind}_rejected", **fields)
