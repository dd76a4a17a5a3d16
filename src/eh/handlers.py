"""
Failure handlers: who is told about a failure after it is logged.

Handlers receive the exception and the constructed policy message. The
caller owns them; the engine only holds a reference for the duration of one
wrapper call.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class Handler(Protocol):
    """Protocol for failure handlers."""

    def notify(self, failure: BaseException, message: str) -> Any:
        """Receive a failure and its policy message."""
        ...


class CallbackHandler:
    """
    Adapt a plain callable to the ``Handler`` protocol.

    Example:
        >>> seen = []
        >>> handler = CallbackHandler(lambda e, msg: seen.append(msg))
        >>> handler.notify(RuntimeError("boom"), "sync failed: boom")
        >>> seen
        ['sync failed: boom']
    """

    def __init__(self, callback: Callable[[BaseException, str], Any], name: str | None = None):
        self._callback = callback
        self._name = name or getattr(callback, "__name__", "callback")

    @property
    def name(self) -> str:
        return self._name

    def notify(self, failure: BaseException, message: str) -> Any:
        return self._callback(failure, message)

    def __repr__(self) -> str:
        return f"CallbackHandler({self._name!r})"


__all__ = [
    "Handler",
    "CallbackHandler",
]
