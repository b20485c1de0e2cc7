"""Logging setup tests."""

import json
import logging

import pytest
import structlog

from demo_config.settings import Settings
from demo_obs.logging import bind_request_context, get_logger, setup_logging


@pytest.fixture
def json_logging(capsys):
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level

    setup_logging(Settings(_env_file=None, LOG_FORMAT="json", LOG_LEVEL="DEBUG"))
    yield capsys

    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_logs_go_to_stderr_only(json_logging):
    get_logger("tests.logging").info("something_happened", answer=42)

    captured = json_logging.readouterr()
    assert captured.out == ""
    line = json.loads(captured.err.strip().splitlines()[-1])
    assert line["event"] == "something_happened"
    assert line["answer"] == 42
    assert line["level"] == "info"
    assert line["logger"] == "tests.logging"


def test_request_context_is_bound(json_logging):
    with bind_request_context("tools/call", 7):
        get_logger("tests.logging").info("inside")
    get_logger("tests.logging").info("outside")

    lines = json_logging.readouterr().err.strip().splitlines()
    inside, outside = [json.loads(line) for line in lines[-2:]]
    assert inside["rpc_method"] == "tools/call"
    assert inside["rpc_id"] == 7
    assert "rpc_method" not in outside
