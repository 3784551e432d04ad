"""
Structured logging for lofi-books.

Call :func:`configure_logging` once per process (the API lifespan and the
CLI root callback both do), then ``get_logger(__name__)`` everywhere::

    logger = get_logger(__name__)
    logger.info("record_created", resource="chapter", id="c1", user_id="u1")

Events are ``snake_case`` names with ``key=value`` fields.  The request-id
and auth middlewares bind ``request_id`` / ``user_id`` through
:func:`bind_context`; the contextvars processor merges them into every
event logged while the request is in flight.

The API writes to stdout.  The CLI writes to stderr so ``--json`` output
on stdout stays parseable.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "lofi-books"

# Third-party loggers that are chatty at INFO (one line per userinfo or webhook call).
_NOISY_LOGGERS = ("httpx", "httpcore")


def _add_service(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", _SERVICE_NAME)
    return event_dict


def _level_number(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "lofi-books",
    add_timestamp: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: DEBUG, INFO, WARNING or ERROR.
        json_format: JSON lines when ``True``, coloured console output when
            ``False``; ``None`` picks JSON unless *stream* is a terminal.
        service: Value of the ``service`` field on every event.
        add_timestamp: Prefix events with an ISO-8601 timestamp.
        stream: Destination (default stdout).
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    level_no = _level_number(level)
    stream = stream or sys.stdout
    if json_format is None:
        json_format = not stream.isatty()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service,
    ]
    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    if json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_no),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Records reach the stream through the root handler, shared with uvicorn.
    logging.basicConfig(format="%(message)s", stream=stream, level=level_no)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level_no, logging.WARNING))


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach fields to every event logged in the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


__all__ = ["bind_context", "configure_logging", "get_logger", "unbind_context"]
