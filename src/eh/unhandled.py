"""Last-resort reporting of exceptions nobody handled.

``report_unhandled`` is meant for top-level ``except`` blocks and shutdown
paths: it writes ``"Unhandled exception: <description>"`` to stderr,
optionally appends the same line to a log file, and notifies handlers.
``install_unhandled_hook`` wires the same reporting into ``sys.excepthook``.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from types import TracebackType
from typing import Callable

from eh.dispatch import notify
from eh.errors import describe_failure
from eh.handlers import Handler
from eh.logging import get_logger

logger = get_logger(__name__)

ExceptHook = Callable[[type[BaseException], BaseException, TracebackType | None], object]


def report_unhandled(
    logfile: str | Path | None = None,
    handlers: Handler | Sequence[Handler | None] | None = None,
    exc: BaseException | None = None,
) -> str | None:
    """Report ``exc``, or the exception currently being handled.

    Args:
        logfile: File to append the message to
        handlers: Handlers notified with the exception and message
        exc: Exception to report; defaults to ``sys.exc_info()``

    Returns:
        The reported message, or None when there was nothing to report
    """
    if exc is None:
        exc = sys.exc_info()[1]
    if exc is None:
        return None

    message = f"Unhandled exception: {describe_failure(exc)}"
    print(message, file=sys.stderr, flush=True)

    if logfile is not None:
        with open(logfile, "a", encoding="utf-8") as f:
            f.write(message + "\n")

    if handlers is not None:
        notify(handlers, exc, message)

    logger.debug("unhandled_reported", error_type=type(exc).__name__, logfile=str(logfile) if logfile else None)
    return message


def install_unhandled_hook(
    logfile: str | Path | None = None,
    handlers: Handler | Sequence[Handler | None] | None = None,
) -> ExceptHook:
    """Report uncaught exceptions before the previous ``sys.excepthook`` runs.

    Returns:
        The previous hook, so callers can restore it
    """
    previous = sys.excepthook

    def hook(
        exc_type: type[BaseException],
        exc_value: BaseException,
        tb: TracebackType | None,
    ) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            report_unhandled(logfile, handlers, exc_value)
        previous(exc_type, exc_value, tb)

    sys.excepthook = hook
    return previous


__all__ = [
    "report_unhandled",
    "install_unhandled_hook",
]
