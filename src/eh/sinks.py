"""
Log sinks: where policy messages are written.

A sink is anything with one method per severity. ``ConsoleSink`` is the
default used when a policy logs with no sink configured, and ``LoggerSink``
adapts ordinary loggers whose method names differ (``warning``/``critical``).

Design Principles:
- Protocol over Inheritance: ``Sink`` is structural, any object with the five
  methods qualifies (including ``unittest.mock`` doubles)
- The console fallback is a sink like any other, not a special case in the
  dispatcher
"""

from __future__ import annotations

import sys
from typing import Any, Protocol, TextIO, runtime_checkable

from eh.severity import Severity


@runtime_checkable
class Sink(Protocol):
    """
    Protocol for log sinks.

    Implementations must provide one method per severity, each taking the
    fully constructed message.
    """

    def debug(self, msg: str) -> Any: ...

    def info(self, msg: str) -> Any: ...

    def warn(self, msg: str) -> Any: ...

    def error(self, msg: str) -> Any: ...

    def fatal(self, msg: str) -> Any: ...


class ConsoleSink:
    """
    Sink writing ``"<severity>: <message>"`` lines to a text stream.

    The stream defaults to ``sys.stderr`` looked up at write time, so stream
    redirection (including pytest's ``capsys``) is honoured.
    """

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def write(self, severity: Severity | str, msg: str) -> None:
        """Write one prefixed line and flush."""
        print(f"{Severity.parse(severity)}: {msg}", file=self.stream, flush=True)

    def debug(self, msg: str) -> None:
        self.write(Severity.DEBUG, msg)

    def info(self, msg: str) -> None:
        self.write(Severity.INFO, msg)

    def warn(self, msg: str) -> None:
        self.write(Severity.WARN, msg)

    def error(self, msg: str) -> None:
        self.write(Severity.ERROR, msg)

    def fatal(self, msg: str) -> None:
        self.write(Severity.FATAL, msg)

    def __repr__(self) -> str:
        return f"ConsoleSink(stream={getattr(self.stream, 'name', self.stream)!r})"


class LoggerSink:
    """
    Adapt a stdlib or structlog logger to the ``Sink`` protocol.

    ``warn`` maps to ``warning`` and ``fatal`` to ``critical``; the other
    severities keep their names.

    Example:
        >>> import logging
        >>> sink = LoggerSink(logging.getLogger("billing"))
        >>> sink.fatal("ledger write failed")  # -> logger.critical(...)
    """

    _METHODS = {
        Severity.DEBUG: "debug",
        Severity.INFO: "info",
        Severity.WARN: "warning",
        Severity.ERROR: "error",
        Severity.FATAL: "critical",
    }

    def __init__(self, logger: Any):
        self.logger = logger

    def log(self, severity: Severity | str, msg: str) -> Any:
        method = self._METHODS[Severity.parse(severity)]
        return getattr(self.logger, method)(msg)

    def debug(self, msg: str) -> Any:
        return self.log(Severity.DEBUG, msg)

    def info(self, msg: str) -> Any:
        return self.log(Severity.INFO, msg)

    def warn(self, msg: str) -> Any:
        return self.log(Severity.WARN, msg)

    def error(self, msg: str) -> Any:
        return self.log(Severity.ERROR, msg)

    def fatal(self, msg: str) -> Any:
        return self.log(Severity.FATAL, msg)

    def __repr__(self) -> str:
        return f"LoggerSink({self.logger!r})"


__all__ = [
    "Sink",
    "ConsoleSink",
    "LoggerSink",
]
