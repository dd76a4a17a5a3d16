"""
Failure kinds and failure descriptions.

The policy engine is generic over the caller's failure taxonomy. It only needs
two things from a failure:

- **Kind:** a hashable tag tested for membership in ``exception_filter``
- **Description:** the text appended to the configured message

Manifesto:
    - **Explicit kinds:** A failure's kind is the ``kind`` attribute it carries,
      or its exact class. Filters are plain set membership, so a subclass of a
      filtered class is *not* a member unless it is listed too.
    - **Caller-defined taxonomy:** Kinds can be exception classes, enum members
      or strings; the engine never interprets them.
    - **Readable descriptions:** An exception without a message is described by
      its class name, so ``"fetch failed: RuntimeError"`` instead of
      ``"fetch failed: "``.

Examples:
    Class-based kinds:

    >>> failure_kind(RuntimeError("boom"))
    <class 'RuntimeError'>
    >>> describe_failure(RuntimeError())
    'RuntimeError'

    Tagged kinds:

    >>> error = KindedError("quota exceeded", kind="quota")
    >>> failure_kind(error)
    'quota'
    >>> is_member(error, {"quota", "network"})
    True

Tags:
    error-handling, failure-kind, exception-filter, eh
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any, Hashable


class KindedError(Exception):
    """
    Exception carrying an explicit failure kind.

    Raise it (or a subclass) from an operation when filtering should match a
    domain tag rather than the exception class.

    Attributes:
        message: Human-readable description
        kind: Hashable tag matched against ``exception_filter``
        metadata: Extra key/value pairs for structured logging
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        *,
        kind: Hashable | None = None,
        metadata: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.metadata = metadata or {}
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "kind": _kind_label(failure_kind(self)),
        }
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, kind={self.kind!r})"


def failure_kind(failure: BaseException) -> Hashable:
    """Return the filter kind of ``failure``.

    The ``kind`` attribute wins when it is set; otherwise the exact class.
    """
    kind = getattr(failure, "kind", None)
    if kind is not None:
        return kind
    return type(failure)


def is_member(failure: BaseException, kinds: Collection[Hashable]) -> bool:
    """Check whether the kind of ``failure`` is one of ``kinds``."""
    return failure_kind(failure) in kinds


def describe_failure(failure: BaseException) -> str:
    """Describe ``failure`` for a policy message.

    Falls back to the class name when the exception has no message.
    """
    text = str(failure)
    return text if text else type(failure).__name__


def _kind_label(kind: Hashable) -> str:
    if isinstance(kind, type):
        return kind.__name__
    return str(getattr(kind, "value", kind))


__all__ = [
    "KindedError",
    "failure_kind",
    "is_member",
    "describe_failure",
]
