"""Policy engine shared by every wrapper.

Turning a failure into side effects happens in a fixed order:

1. Build the message: ``"<message>: <description>"``, or the bare
   description when the policy has no message.
2. Log it, only if a logger is configured and the failure is actionable
   (no ``exception_filter``, or the failure's kind is a member).
3. Notify handlers, whenever handlers are configured. The filter does not
   gate notification.
"""

from __future__ import annotations

from eh.config import PolicyConfig
from eh.dispatch import log, notify
from eh.errors import describe_failure, failure_kind, is_member
from eh.logging import get_logger

logger = get_logger(__name__)


def build_message(config: PolicyConfig, failure: BaseException) -> str:
    """Construct the policy message for ``failure``."""
    description = describe_failure(failure)
    if config.message is None:
        return description
    return f"{config.message}: {description}"


def is_actionable(config: PolicyConfig, failure: BaseException) -> bool:
    """True when no filter is configured or the failure's kind is in it."""
    if config.exception_filter is None:
        return True
    return is_member(failure, config.exception_filter)


def apply_policy(config: PolicyConfig, failure: BaseException) -> str:
    """Log and notify ``failure`` according to ``config``.

    Returns:
        The constructed message
    """
    message = build_message(config, failure)
    logged = config.logger is not None and is_actionable(config, failure)
    notified = config.handlers is not None

    if logged:
        log(config.logger, message, config.level)
    if notified:
        notify(config.handlers, failure, message)

    logger.debug(
        "policy_applied",
        kind=str(failure_kind(failure)),
        severity=config.level.value,
        logged=logged,
        notified=notified,
    )
    return message


__all__ = [
    "build_message",
    "is_actionable",
    "apply_policy",
]
