"""Tests for the package logger's levels and handlers."""

import io
import json
import logging

import pytest

from gitdriver.log import configure_logging, get_logger


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("GITDRIVER_DEBUG", raising=False)
    monkeypatch.delenv("GITDRIVER_LOG_LEVEL", raising=False)


class TestConfigureLogging:
    def test_info_reaches_stderr(self, capsys):
        configure_logging("info", "text")
        log = get_logger(operation="status")
        log.debug("operation.start")
        log.info("operation.success")
        log.warning("operation.failed")
        err = capsys.readouterr().err
        assert "operation.success" in err
        assert "operation.failed" in err
        assert "operation.start" not in err

    def test_debug_env_lowers_level(self, capsys, monkeypatch):
        monkeypatch.setenv("GITDRIVER_DEBUG", "1")
        configure_logging("error", "text")
        get_logger().debug("operation.start")
        assert "operation.start" in capsys.readouterr().err

    def test_level_from_env(self, capsys, monkeypatch):
        monkeypatch.setenv("GITDRIVER_LOG_LEVEL", "info")
        configure_logging()
        get_logger().info("provider.created")
        assert "provider.created" in capsys.readouterr().err

    def test_reconfigure_keeps_one_handler(self):
        configure_logging("info")
        configure_logging("debug")
        assert len(logging.getLogger("gitdriver").handlers) == 1

    def test_explicit_stream_replaces_stderr(self, capsys):
        configure_logging("info")
        stream = io.StringIO()
        configure_logging("info", "json", stream)
        get_logger(tenant_id="t1").info("operation.success")
        assert capsys.readouterr().err == ""
        event = json.loads(stream.getvalue())
        assert event["event"] == "operation.success"
        assert event["tenant_id"] == "t1"
        assert event["level"] == "info"


class TestUnconfigured:
    def test_no_handler_attached(self):
        get_logger().warning("operation.failed")
        assert logging.getLogger("gitdriver").handlers == []
