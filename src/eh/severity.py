"""Severity levels for policy log dispatch.

Each severity names the sink method that receives the message, so a
``Severity.WARN`` message is delivered through ``sink.warn(message)``.

Example:
    >>> from eh.severity import Severity, WARN
    >>> Severity("warn") is WARN
    True
    >>> WARN.method
    'warn'
"""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Log severity used by the policy engine."""

    ERROR = "error"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    FATAL = "fatal"

    @property
    def method(self) -> str:
        """Name of the sink method for this severity."""
        return self.value

    @classmethod
    def parse(cls, value: Severity | str) -> Severity:
        """Coerce a severity or its string value.

        Raises:
            ValueError: If ``value`` is not a known severity.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown severity {value!r} (expected one of: {valid})") from None

    def __str__(self) -> str:
        return self.value


ERROR = Severity.ERROR
DEBUG = Severity.DEBUG
INFO = Severity.INFO
WARN = Severity.WARN
FATAL = Severity.FATAL


__all__ = [
    "Severity",
    "ERROR",
    "DEBUG",
    "INFO",
    "WARN",
    "FATAL",
]
