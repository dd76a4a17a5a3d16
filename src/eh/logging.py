"""
Structured diagnostics for the eh engine itself.

The wrappers emit ``debug`` events (``retry_attempt_failed``,
``retry_exhausted``, ``retry_filtered_out``, ``policy_applied``) through
structlog. These are library diagnostics: they never replace the sinks a
policy names, and they are silent until the host application configures
logging at DEBUG.

Examples:
    Production (JSON for log aggregation):

    >>> from eh.logging import configure_logging, get_logger
    >>> configure_logging(level="INFO", json_format=True, service="billing-worker")
    >>> logger = get_logger(__name__)
    >>> logger.info("event_happened", key="value", count=42)

    Development (auto-detect: colored console if tty):

    >>> configure_logging(level="DEBUG")
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from eh.config import get_settings


def _service_metadata(service: str) -> Processor:
    """Stamp ``service.name`` onto every event."""

    def add(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service.name", service)
        return event_dict

    return add


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    service: str = "eh",
) -> None:
    """Configure structlog rendering for the engine's diagnostics.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR); defaults to ``EH_LOG_LEVEL``
        json_format: True for JSON, False for console, None for ``EH_LOG_JSON``
            and then auto-detect (JSON if not tty)
        service: Service name to include in logs
    """
    settings = get_settings()
    numeric_level = getattr(logging, (level or settings.log_level).upper())

    if json_format is None:
        json_format = settings.log_json
    if json_format is None:
        json_format = not sys.stdout.isatty()

    renderer: Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.dev.set_exc_info,
            _service_metadata(service),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger backed by the stdlib logger ``name``.

    Level filtering happens in stdlib logging, so diagnostics stay quiet in
    host applications that never configure logging below WARNING.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


__all__ = [
    "configure_logging",
    "get_logger",
]
