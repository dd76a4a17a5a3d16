"""Policy configuration and process-wide defaults.

Two layers:

- ``EHSettings``: environment-driven defaults (``EH_THRESHOLD``, ``EH_DELAY``,
  ``EH_LEVEL``, ``EH_LOG_LEVEL``, ``EH_LOG_JSON``), loaded once per process.
- ``PolicyConfig``: the immutable, validated options for a single wrapper call.

Example:
    >>> from eh.config import PolicyConfig
    >>> config = PolicyConfig.coerce({"message": "fetch failed", "threshold": 5})
    >>> config.threshold
    5
    >>> PolicyConfig.coerce(None).exception_filter is None
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from eh.severity import Severity


class EHSettings(BaseSettings):
    """Process-wide defaults for policies that leave an option unset.

    Fields
    ──────
    threshold    : Maximum attempts for retry wrappers
    delay        : Seconds to sleep between retry attempts
    level        : Severity used when a policy names none
    log_level    : Level for the library's own structlog diagnostics
    log_json     : JSON diagnostics (None = auto-detect from the TTY)
    """

    model_config = SettingsConfigDict(
        env_prefix="EH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Retry ────────────────────────────────────────────────────
    threshold: int = 3
    delay: float = Field(default=0.2, ge=0)

    # ── Logging ──────────────────────────────────────────────────
    level: Severity = Severity.ERROR
    log_level: str = "INFO"
    log_json: bool | None = None

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v: Any) -> Severity:
        return Severity.parse(v)


@lru_cache(maxsize=1)
def get_settings() -> EHSettings:
    """Cached settings — loaded once per process."""
    return EHSettings()


def reset_settings() -> None:
    """Drop the cached settings so the next lookup re-reads the environment."""
    get_settings.cache_clear()


class PolicyConfig(BaseModel):
    """
    Immutable error-handling policy for one wrapper invocation.

    ``logger`` and ``handlers`` take a single collaborator or a sequence of
    them (``None`` entries allowed). ``exception_filter`` keeps the difference
    between absent (``None``) and empty: an empty filter matches nothing.

    ``level``, ``threshold`` and ``delay`` that are unset or None fall back to
    ``EHSettings``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    message: str | None = None
    logger: Any = None
    level: Severity = Field(default_factory=lambda: get_settings().level)
    handlers: Any = None
    exception_filter: frozenset[Any] | None = None
    threshold: int = Field(default_factory=lambda: get_settings().threshold)
    delay: float = Field(default_factory=lambda: get_settings().delay, ge=0)
    args: tuple[Any, ...] | None = None

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v: Any) -> Severity:
        if v is None:
            return get_settings().level
        return Severity.parse(v)

    @field_validator("threshold", "delay", mode="before")
    @classmethod
    def default_when_none(cls, v: Any, info: ValidationInfo) -> Any:
        """An option passed as None falls back to its settings default."""
        if v is None:
            return getattr(get_settings(), info.field_name)
        return v

    @field_validator("exception_filter", mode="before")
    @classmethod
    def collect_kinds(cls, v: Any) -> Any:
        """Accept any iterable of kinds, or a single class or string kind."""
        if v is None or isinstance(v, (set, frozenset)):
            return v
        if isinstance(v, (type, str)):
            return frozenset([v])
        return frozenset(v)

    @classmethod
    def coerce(cls, options: PolicyConfig | Mapping[str, Any] | None) -> PolicyConfig:
        """Normalise wrapper options into a ``PolicyConfig``.

        ``None`` is the empty policy. Unknown option names raise
        ``pydantic.ValidationError``.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls(**options)
        raise TypeError(
            f"Policy options must be a PolicyConfig, a mapping or None, not {type(options).__name__}"
        )

    def joined_args(self) -> str | None:
        """The operation's single input: ``args`` joined by spaces, or None."""
        if self.args is None:
            return None
        return " ".join(str(arg) for arg in self.args)


__all__ = [
    "EHSettings",
    "get_settings",
    "reset_settings",
    "PolicyConfig",
]
