"""eh -- run callables under a declarative error-handling policy.

A policy says what happens when an operation fails: which failure kinds
matter, which sinks get a log line and at what severity, which handlers are
notified, and how many attempts are made. The caller picks the propagation
behaviour by picking the function:

- ``run``: one attempt, failures swallowed
- ``run_or_raise``: one attempt, failures re-raised
- ``retry``: bounded retry, returns True/False
- ``retry_or_raise``: bounded retry, final failure re-raised

Example:
    >>> import eh
    >>> eh.retry(
    ...     {
    ...         "message": "price sync failed",
    ...         "logger": eh.LoggerSink(logging.getLogger("sync")),
    ...         "level": eh.WARN,
    ...         "exception_filter": {ConnectionError},
    ...         "threshold": 5,
    ...         "delay": 1.0,
    ...     },
    ...     sync_prices,
    ... )
    True

Architecture::

    severity.py     Severity enum + ERROR/DEBUG/INFO/WARN/FATAL constants
    errors.py       Failure kinds (KindedError, failure_kind, describe_failure)
    config.py       PolicyConfig (per call) + EHSettings (process defaults)
    sinks.py        Sink protocol, ConsoleSink fallback, LoggerSink adapter
    handlers.py     Handler protocol, CallbackHandler adapter
    dispatch.py     log() / notify() one-or-many fan-out
    policy.py       apply_policy(): message, filter, log, notify
    wrappers.py     run(), run_or_raise()
    retry.py        retry(), retry_or_raise(), FixedDelay, RetryContext
    unhandled.py    report_unhandled(), install_unhandled_hook()
    logging.py      structlog diagnostics for the engine itself
"""

from eh.config import EHSettings, PolicyConfig, get_settings, reset_settings
from eh.dispatch import log, notify
from eh.errors import KindedError, describe_failure, failure_kind
from eh.handlers import CallbackHandler, Handler
from eh.logging import configure_logging, get_logger
from eh.policy import apply_policy
from eh.retry import FixedDelay, RetryContext, retry, retry_or_raise
from eh.severity import DEBUG, ERROR, FATAL, INFO, WARN, Severity
from eh.sinks import ConsoleSink, LoggerSink, Sink
from eh.unhandled import install_unhandled_hook, report_unhandled
from eh.wrappers import run, run_or_raise

__version__ = "0.3.0"

__all__ = [
    # Wrappers
    "run",
    "run_or_raise",
    "retry",
    "retry_or_raise",
    "FixedDelay",
    "RetryContext",
    # Policy engine
    "PolicyConfig",
    "apply_policy",
    "log",
    "notify",
    # Severity
    "Severity",
    "ERROR",
    "DEBUG",
    "INFO",
    "WARN",
    "FATAL",
    # Collaborators
    "Sink",
    "ConsoleSink",
    "LoggerSink",
    "Handler",
    "CallbackHandler",
    # Failures
    "KindedError",
    "failure_kind",
    "describe_failure",
    "report_unhandled",
    "install_unhandled_hook",
    # Ambient
    "EHSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
