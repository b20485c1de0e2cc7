"""
Structured Logging (structlog).

Everything is written to stderr: stdout carries the JSON-RPC stream and a
single stray log line there would corrupt it.
"""

import logging
import sys

import structlog

from demo_config.settings import Settings


def setup_logging(settings: Settings) -> None:
    """
    Configure structlog for structured logging.

    Output format: JSON (default) or text (dev)
    Includes: logger name, level, timestamp, plus any request context bound
    with bind_request_context()
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=settings.LOG_LEVEL.upper(),
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def bind_request_context(method: str, request_id=None):
    """Attach the JSON-RPC method and id to every log line in this block."""
    return structlog.contextvars.bound_contextvars(rpc_method=method, rpc_id=request_id)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get configured logger."""
    return structlog.get_logger(name)
