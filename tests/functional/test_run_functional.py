"""Functional tests for name-based dispatch through a ``TestRun``."""

from __future__ import annotations

import logging

import pytest

from tester.config import TesterConfig
from tester.models.failure import FailureKind
from tester.reporter import ListReporter
from tester.run import TestRun
from tester.runners.base import ArgumentType, ScriptError, StringEnum
from tester.runners.pubsub import message


def test_bound_function_names(run: TestRun) -> None:
    assert run.function_names() == [
        "emptyPubSubTopic",
        "pubsub.check",
        "pubsub.emptyTopic",
        "rest.addHeader",
        "rest.check",
        "rest.send",
    ]


def test_send_declares_method_enum_and_optional_body(run: TestRun) -> None:
    send = run.describe("rest.send")
    method, path, body = send.args
    assert method.types == (StringEnum(("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD")),)
    assert path.types == (ArgumentType.STRING,)
    assert body.optional and body.display_name == "body"
    assert body.types == (ArgumentType.STRING, ArgumentType.TABLE)


def test_rest_flow_by_name(run: TestRun) -> None:
    run.call("rest.addHeader", "Authorization", "Bearer abc")
    run.call("rest.send", "GET", "/headers")
    run.call("rest.check", 200, {"auth": "Bearer abc"})


def test_optional_body_may_be_omitted_or_nil(run: TestRun) -> None:
    run.call("rest.send", "GET", "/users/2")
    run.call("rest.check", 200.0, {"roles": ["admin", "dev"]})
    run.call("rest.send", "GET", "/users/2", None)
    run.call("rest.check", 200, {"name": "Bo"})


def test_pubsub_flow_by_name(run: TestRun) -> None:
    run.pubsub.receive("orders", message({"id": 7}))
    run.call("pubsub.check", "orders", {"data": {"id": 7}})
    run.call("emptyPubSubTopic", "orders")
    with pytest.raises(ScriptError) as excinfo:
        run.call("pubsub.check", "orders", {"data": {"id": 7}})
    assert excinfo.value.kind is FailureKind.NO_MESSAGES_RECEIVED


def test_unknown_function_is_usage_error(run: TestRun) -> None:
    with pytest.raises(ScriptError) as excinfo:
        run.call("rest.get", "/users/1")
    assert excinfo.value.kind is FailureKind.USAGE_ERROR
    assert "rest.send" in str(excinfo.value)


@pytest.mark.parametrize(
    "name, args, fragment",
    [
        ("rest.send", ("FETCH", "/x"), "bad argument #1 (method)"),
        ("rest.send", ("GET",), "expected 2-3 arguments, got 1"),
        ("rest.send", ("GET", "/x", 12), "bad argument #3 (body)"),
        ("rest.check", (True, {}), "bad argument #1 (status_code)"),
        ("rest.check", ("200", {}), "number expected, got str"),
        ("pubsub.check", ("orders", "data"), "table expected"),
        ("rest.addHeader", ("X-A",), "expected 2 arguments, got 1"),
    ],
)
def test_argument_checking(run: TestRun, name: str, args: tuple, fragment: str) -> None:
    with pytest.raises(ScriptError) as excinfo:
        run.call(name, *args)
    assert excinfo.value.kind is FailureKind.USAGE_ERROR
    assert fragment in str(excinfo.value)


def test_runs_do_not_share_state(users_app, config) -> None:  # type: ignore[no-untyped-def]
    with TestRun(users_app, config=config) as first, TestRun(users_app, config=config) as second:
        first.pubsub.receive("orders", message({"id": 1}))
        first.call("rest.send", "GET", "/users/1")
        with pytest.raises(ScriptError) as excinfo:
            second.call("pubsub.check", "orders", {})
        assert excinfo.value.kind is FailureKind.UNREGISTERED_TOPIC
        with pytest.raises(ScriptError) as excinfo:
            second.call("rest.check", 200, {})
        assert excinfo.value.kind is FailureKind.SEND_NOT_CALLED


def test_configured_log_level_applies_to_runtime_loggers(users_app) -> None:  # type: ignore[no-untyped-def]
    tester_logger = logging.getLogger("tester")
    try:
        with TestRun(users_app, config=TesterConfig(log_level="error"), reporter=ListReporter()):
            assert tester_logger.level == logging.ERROR
            assert not logging.getLogger("tester.run").isEnabledFor(logging.INFO)
    finally:
        tester_logger.setLevel(logging.NOTSET)
