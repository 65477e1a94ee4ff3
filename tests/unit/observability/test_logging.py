"""Unit tests for observability logging."""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from mp_metrics.metrics import AlreadyRegisteredError, Counter, Desc, InvalidDescriptorError, MetricOpts
from mp_metrics.observability.logging import ErrorDetailProcessor, JsonLoggerFactory, get_logger
from mp_metrics.registry import Registry
from mp_metrics.testing import FailingCollector


@pytest.fixture()
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# ErrorDetailProcessor
# ---------------------------------------------------------------------------


class TestErrorDetailProcessor:
    def test_flattens_base_error(self) -> None:
        err = InvalidDescriptorError("bad name", fq_name="bad-name")
        out = ErrorDetailProcessor()(None, "warning", {"event": "x", "error": err})
        assert out["error"] == "bad name"
        assert out["error_code"] == "invalid_descriptor"
        assert out["error_detail"] == {"fq_name": "bad-name"}

    def test_leaves_other_errors_alone(self) -> None:
        err = ValueError("plain")
        out = ErrorDetailProcessor()(None, "warning", {"event": "x", "error": err})
        assert out["error"] is err
        assert "error_code" not in out

    def test_no_error_key(self) -> None:
        assert ErrorDetailProcessor()(None, "info", {"event": "x"}) == {"event": "x"}


# ---------------------------------------------------------------------------
# get_logger
# ---------------------------------------------------------------------------


class TestGetLogger:
    def test_binds_initial_values(self) -> None:
        with capture_logs() as logs:
            get_logger("test", component="registry").info("hello", n=1)
        assert logs == [{"event": "hello", "n": 1, "component": "registry", "log_level": "info"}]


class TestRegistryEvents:
    def test_registration_events(self) -> None:
        registry = Registry()
        counter = Counter(MetricOpts(name="events_total", help="h"))
        with capture_logs() as logs:
            registry.register(counter)
            registry.unregister(counter)
        assert [e["event"] for e in logs] == ["collector_registered", "collector_unregistered"]

    def test_must_register_logs_critical(self) -> None:
        registry = Registry()
        counter = Counter(MetricOpts(name="events_total", help="h"))
        registry.register(counter)
        with capture_logs() as logs, pytest.raises(AlreadyRegisteredError):
            registry.must_register(counter)
        assert logs[-1]["event"] == "registration_failed"
        assert logs[-1]["log_level"] == "critical"

    def test_collector_failure_logged(self) -> None:
        registry = Registry()
        registry.register(FailingCollector(Desc("broken", "h"), RuntimeError("boom")))
        with capture_logs() as logs:
            registry.gather()
        events = [e["event"] for e in logs]
        assert "collector_failed" in events
        assert events[-1] == "gather_completed"


# ---------------------------------------------------------------------------
# JsonLoggerFactory
# ---------------------------------------------------------------------------


class TestJsonLoggerFactory:
    def test_configure_emits_json(
        self, restore_logging: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        JsonLoggerFactory.configure(level=logging.INFO)
        get_logger("json.test").warning(
            "collector_failed", error=InvalidDescriptorError("bad", fq_name="x")
        )
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "collector_failed"
        assert payload["error_code"] == "invalid_descriptor"
        assert payload["level"] == "warning"
        assert payload["logger"] == "json.test"

    def test_configure_sets_level(self, restore_logging: None) -> None:
        JsonLoggerFactory.configure(level=logging.WARNING)
        assert logging.getLogger().level == logging.WARNING
