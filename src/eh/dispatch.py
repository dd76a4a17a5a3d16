"""Fan-out of policy messages to sinks and failures to handlers.

Both ``logger`` and ``handlers`` options accept one collaborator or a
sequence of them. ``as_sequence`` normalises either shape to a list before
anything is called, and drops ``None`` entries.

Only a bare ``None`` target falls back to the default console sink. A list
that happens to contain nothing but ``None`` logs nothing:

    >>> log(None, "m", "fatal")          # stderr: "fatal: m"
    >>> log([None, sink], "m", "fatal")  # sink.fatal("m") only
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from eh.handlers import Handler
from eh.severity import Severity
from eh.sinks import ConsoleSink, Sink

T = TypeVar("T")

DEFAULT_SINK: Sink = ConsoleSink()


def as_sequence(value: T | Sequence[T | None] | None, default: T | None = None) -> list[T]:
    """Normalise a one-or-many value to a list of present items.

    Args:
        value: A single item, a sequence of items (``None`` entries allowed),
            or ``None``
        default: Item used when ``value`` itself is ``None``

    Returns:
        The non-``None`` items, in order
    """
    if value is None:
        return [] if default is None else [default]
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return [item for item in value if item is not None]
    return [value]


def log(
    sinks: Sink | Sequence[Sink | None] | None,
    message: str,
    severity: Severity | str = Severity.ERROR,
) -> None:
    """Write ``message`` to each sink through the method named by ``severity``.

    Raises:
        ValueError: If ``severity`` is not a known severity.
    """
    method = Severity.parse(severity).method
    for sink in as_sequence(sinks, default=DEFAULT_SINK):
        getattr(sink, method)(message)


def notify(
    handlers: Handler | Sequence[Handler | None] | None,
    failure: BaseException,
    message: str,
) -> None:
    """Call ``notify(failure, message)`` on each present handler, in order."""
    for handler in as_sequence(handlers):
        handler.notify(failure, message)


__all__ = [
    "DEFAULT_SINK",
    "as_sequence",
    "log",
    "notify",
]
