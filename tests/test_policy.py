"""Tests for eh.policy — message construction, filtering, log + notify."""

import logging

import pytest

from eh import FATAL, KindedError, apply_policy
from eh.config import PolicyConfig
from eh.policy import build_message, is_actionable


class TestBuildMessage:
    def test_prefixes_configured_message(self):
        config = PolicyConfig(message="nightly export failed")
        assert build_message(config, RuntimeError("timeout")) == "nightly export failed: timeout"

    def test_uses_class_name_for_empty_exception(self):
        config = PolicyConfig(message="the message")
        assert build_message(config, RuntimeError()) == "the message: RuntimeError"

    def test_bare_description_without_message(self):
        assert build_message(PolicyConfig(), ValueError("bad input")) == "bad input"

    def test_empty_message_still_joins(self):
        assert build_message(PolicyConfig(message=""), ValueError("x")) == ": x"


class TestIsActionable:
    def test_no_filter_is_actionable(self):
        assert is_actionable(PolicyConfig(), KeyError()) is True

    def test_member_is_actionable(self):
        config = PolicyConfig(exception_filter=[KeyError, ValueError])
        assert is_actionable(config, ValueError()) is True

    def test_non_member_is_not_actionable(self):
        config = PolicyConfig(exception_filter=[KeyError])
        assert is_actionable(config, ValueError()) is False

    def test_empty_filter_matches_nothing(self):
        assert is_actionable(PolicyConfig(exception_filter=[]), RuntimeError()) is False

    def test_subclass_is_not_actionable(self):
        class StaleCacheError(LookupError):
            pass

        config = PolicyConfig(exception_filter=[LookupError])
        assert is_actionable(config, StaleCacheError()) is False

    def test_kind_tag_membership(self):
        config = PolicyConfig(exception_filter={"throttled"})
        assert is_actionable(config, KindedError("slow down", kind="throttled")) is True
        assert is_actionable(config, KindedError("gone", kind="not_found")) is False


class TestApplyPolicy:
    def test_returns_message(self):
        assert apply_policy(PolicyConfig(message="m"), RuntimeError("x")) == "m: x"

    def test_logs_and_notifies(self, sink, handler):
        error = RuntimeError("x")
        config = PolicyConfig(message="m", logger=sink, handlers=handler, level=FATAL)

        apply_policy(config, error)

        sink.fatal.assert_called_once_with("m: x")
        assert handler.calls == [(error, "m: x")]

    def test_filter_gates_logging_not_notification(self, sink, handler):
        config = PolicyConfig(message="m", logger=sink, handlers=handler, exception_filter=[KeyError])

        apply_policy(config, RuntimeError("x"))

        sink.error.assert_not_called()
        assert handler.msg == "m: x"

    def test_nothing_configured_has_no_side_effects(self, capsys):
        apply_policy(PolicyConfig(message="m"), RuntimeError("x"))
        assert capsys.readouterr().err == ""

    def test_logs_before_notifying(self, sink):
        order = []
        sink.error.side_effect = lambda msg: order.append("log")

        class Pager:
            def notify(self, failure, message):
                order.append("notify")

        apply_policy(PolicyConfig(logger=sink, handlers=Pager()), RuntimeError())
        assert order == ["log", "notify"]

    def test_handler_errors_propagate(self, sink):
        class BrokenHandler:
            def notify(self, failure, message):
                raise ConnectionError("smtp down")

        with pytest.raises(ConnectionError):
            apply_policy(PolicyConfig(handlers=BrokenHandler()), RuntimeError())

    def test_emits_policy_applied_diagnostic(self, sink, caplog):
        caplog.set_level(logging.DEBUG, logger="eh.policy")
        apply_policy(PolicyConfig(logger=sink), RuntimeError())
        assert "policy_applied" in caplog.text
