"""
Shared pytest fixtures for eh tests.

This module provides:
- Recording doubles for sinks and handlers
- Failing operations with call counters
- Settings cache isolation
"""

import sys
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock

import pytest

# Ensure eh package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from eh.config import reset_settings

SINK_METHODS = ["debug", "info", "warn", "error", "fatal"]


# =============================================================================
# Settings Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop cached settings and EH_* env vars around every test."""
    for name in ("EH_THRESHOLD", "EH_DELAY", "EH_LEVEL", "EH_LOG_LEVEL", "EH_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


# =============================================================================
# Collaborator Doubles
# =============================================================================


class RecordingHandler:
    """Handler double remembering every notification."""

    def __init__(self):
        self.calls: list[tuple[BaseException, str]] = []

    def notify(self, failure: BaseException, message: str) -> None:
        self.calls.append((failure, message))

    @property
    def e(self) -> BaseException | None:
        return self.calls[-1][0] if self.calls else None

    @property
    def msg(self) -> str | None:
        return self.calls[-1][1] if self.calls else None


class CountingOperation:
    """Operation that fails ``failures`` times, then returns ``result``.

    ``failures=None`` fails forever.
    """

    def __init__(self, error: BaseException | type[BaseException] = RuntimeError, failures: int | None = None, result=None):
        self.error = error
        self.failures = failures
        self.result = result
        self.calls: list[str | None] = []

    @property
    def count(self) -> int:
        return len(self.calls)

    def __call__(self, arg: str | None):
        self.calls.append(arg)
        if self.failures is None or self.count <= self.failures:
            raise self.error() if isinstance(self.error, type) else self.error
        return self.result


@pytest.fixture
def sink() -> MagicMock:
    """Sink double exposing only the five severity methods."""
    return MagicMock(spec=SINK_METHODS)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def make_operation() -> type[CountingOperation]:
    """Factory for counting operations: ``make_operation(IOError, failures=2)``."""
    return CountingOperation


@pytest.fixture
def always_fails() -> CountingOperation:
    return CountingOperation(RuntimeError)
