"""Single-attempt execution wrappers.

``run`` and ``run_or_raise`` invoke an operation once with the policy's joined
``args``. On failure both apply the policy engine; ``run`` then swallows the
failure, ``run_or_raise`` re-raises it.

Example:
    >>> from eh import run, run_or_raise, WARN
    >>> run({"message": "cache refresh failed", "logger": sink, "level": WARN}, refresh)
    >>> run_or_raise({"message": "ledger write failed", "handlers": pager}, write)

Only ``Exception`` subclasses are handled; ``KeyboardInterrupt`` and
``SystemExit`` pass straight through.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, TypeVar

from eh.config import PolicyConfig
from eh.policy import apply_policy

T = TypeVar("T")

Options = PolicyConfig | Mapping[str, Any] | None
Operation = Callable[[str | None], T]


def run(config: Options, operation: Operation[T]) -> T | None:
    """Run ``operation`` once, applying the policy and swallowing any failure.

    Returns:
        The operation's result, or None when it failed
    """
    policy = PolicyConfig.coerce(config)
    try:
        return operation(policy.joined_args())
    except Exception as e:
        apply_policy(policy, e)
        return None


def run_or_raise(config: Options, operation: Operation[T]) -> T:
    """Run ``operation`` once, applying the policy and re-raising any failure.

    The failure is re-raised whatever ``exception_filter`` says: the filter
    only decides whether the failure is logged.

    Returns:
        The operation's result
    """
    policy = PolicyConfig.coerce(config)
    try:
        return operation(policy.joined_args())
    except Exception as e:
        apply_policy(policy, e)
        raise


__all__ = [
    "Options",
    "Operation",
    "run",
    "run_or_raise",
]
