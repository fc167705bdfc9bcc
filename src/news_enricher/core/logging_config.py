"""Logging setup shared by stdlib and structlog callers.

Both ``logging.getLogger(__name__)`` and ``structlog.get_logger(__name__)``
loggers write through one root handler whose formatter runs the structlog
processor chain, so a ``%s``-style stdlib message and a key/value structlog
event come out in the same shape: JSON lines normally, a coloured console
layout at DEBUG.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

#: Set by the HTTP middleware for the lifetime of a request.
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

_REDACTED = "[REDACTED]"
_SECRET_SUBSTRINGS: tuple[str, ...] = (
    "api_key",
    "authorization",
    "bearer",
    "password",
    "secret",
    "token",
)
_QUIETED_LOGGERS: tuple[str, ...] = ("uvicorn.access", "httpx", "httpcore")


def _is_secret_key(key: object) -> bool:
    lowered = str(key).lower()
    return any(fragment in lowered for fragment in _SECRET_SUBSTRINGS)


def _redact_secrets(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Mask secret-looking fields, including keys one dict deep (``headers=``)."""
    for key, value in list(event_dict.items()):
        if _is_secret_key(key):
            event_dict[key] = _REDACTED
        elif isinstance(value, dict):
            event_dict[key] = {
                inner: _REDACTED if _is_secret_key(inner) else inner_value
                for inner, inner_value in value.items()
            }
    return event_dict


def _inject_request_id(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    request_id = request_id_var.get()
    if request_id is not None:
        event_dict.setdefault("request_id", request_id)
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        _inject_request_id,
        _redact_secrets,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(console: bool) -> Processor:
    if console:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def configure_logging(log_level: str = "INFO") -> None:
    """Route all logging through one structlog-formatted stdout handler.

    Repeated calls replace the root handler instead of stacking another.
    An unrecognised *log_level* falls back to INFO.  Below DEBUG the chatty
    HTTP client and access loggers are held at WARNING.
    """
    level_name = log_level.upper()
    console = level_name == "DEBUG"
    processors = _shared_processors()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(console),
            ],
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level_name, logging.INFO))

    quiet_level = logging.NOTSET if console else logging.WARNING
    for name in _QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
