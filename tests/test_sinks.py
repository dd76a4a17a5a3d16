"""Tests for sinks, handlers and severities."""

import io
import logging
from unittest.mock import MagicMock

import pytest

from eh import (
    DEBUG,
    ERROR,
    FATAL,
    INFO,
    WARN,
    CallbackHandler,
    ConsoleSink,
    Handler,
    LoggerSink,
    Severity,
    Sink,
    log,
)


class TestSeverity:
    def test_constants(self):
        assert [s.value for s in (ERROR, DEBUG, INFO, WARN, FATAL)] == [
            "error",
            "debug",
            "info",
            "warn",
            "fatal",
        ]

    def test_parse_is_case_insensitive(self):
        assert Severity.parse("FATAL") is FATAL
        assert Severity.parse(INFO) is INFO

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError, match="expected one of"):
            Severity.parse("verbose")

    def test_str_is_value(self):
        assert str(WARN) == "warn"
        assert f"{FATAL}: m" == "fatal: m"


class TestConsoleSink:
    def test_writes_prefixed_line(self):
        stream = io.StringIO()
        ConsoleSink(stream).warn("low disk")
        assert stream.getvalue() == "warn: low disk\n"

    @pytest.mark.parametrize("method", ["debug", "info", "warn", "error", "fatal"])
    def test_every_severity(self, method):
        stream = io.StringIO()
        getattr(ConsoleSink(stream), method)("m")
        assert stream.getvalue() == f"{method}: m\n"

    def test_defaults_to_stderr(self, capsys):
        ConsoleSink().error("boom")
        assert capsys.readouterr().err == "error: boom\n"

    def test_satisfies_protocol(self):
        assert isinstance(ConsoleSink(), Sink)


class TestLoggerSink:
    @pytest.mark.parametrize(
        "severity,method",
        [(DEBUG, "debug"), (INFO, "info"), (WARN, "warning"), (ERROR, "error"), (FATAL, "critical")],
    )
    def test_maps_to_logger_methods(self, severity, method):
        logger = MagicMock(spec=["debug", "info", "warning", "error", "critical"])
        log(LoggerSink(logger), "m", severity)
        getattr(logger, method).assert_called_once_with("m")

    def test_stdlib_logger(self, caplog):
        caplog.set_level(logging.DEBUG, logger="eh.tests.sink")
        log(LoggerSink(logging.getLogger("eh.tests.sink")), "ledger write failed", FATAL)

        record = caplog.records[-1]
        assert record.levelno == logging.CRITICAL
        assert record.getMessage() == "ledger write failed"

    def test_satisfies_protocol(self):
        assert isinstance(LoggerSink(logging.getLogger()), Sink)


class TestCallbackHandler:
    def test_calls_callback(self):
        seen = []
        handler = CallbackHandler(lambda e, msg: seen.append((type(e), msg)))
        handler.notify(RuntimeError(), "m")
        assert seen == [(RuntimeError, "m")]

    def test_name_defaults_to_callback_name(self):
        def page_oncall(failure, message):
            pass

        assert CallbackHandler(page_oncall).name == "page_oncall"
        assert CallbackHandler(page_oncall, name="pager").name == "pager"

    def test_satisfies_protocol(self):
        assert isinstance(CallbackHandler(print), Handler)
