"""Structured logging for the matching client and its CLI."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from solbridge_core.config.settings import Settings

# Transport libraries log every request at INFO; only their warnings are kept.
QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(settings: Settings) -> None:
    """Send structlog and stdlib records through one renderer on stderr.

    stdout is left to command output, so JSON payloads printed by the CLI
    stay parseable when logging is verbose. In JSON mode exceptions are
    rendered into an ``exception`` field instead of a multi-line traceback.
    """
    shared_processors: list[structlog.types.Processor] = [
        merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    final_processors: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if settings.log_format == "json":
        final_processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=final_processors,
            foreign_pre_chain=shared_processors,
        )
    )

    level = _resolve_level(settings.log_level)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def bind_session_context(session_id: str, **fields: Any) -> None:
    """Attach session_id (and any extra fields) to every later log entry."""
    bind_contextvars(session_id=session_id, **fields)


def clear_session_context() -> None:
    """Drop everything bound by bind_session_context."""
    clear_contextvars()


def _resolve_level(level_name: str) -> int:
    """Map a level name to its numeric value, defaulting to INFO."""
    level = logging.getLevelNamesMapping().get(level_name.upper())
    return level if level is not None else logging.INFO
