import pytest

from gemini_media.telemetry import InMemoryReporter, TelemetryContext

pytestmark = pytest.mark.unit


def test_disabled_without_env_returns_shared_no_op():
    reporter = InMemoryReporter()
    first = TelemetryContext(reporter)
    second = TelemetryContext()

    assert first is second
    with first("upload.poll") as tele:
        tele.count("polls")
    assert reporter.timings == {}
    assert reporter.metrics == {}


def test_enabled_context_records_nested_scopes(monkeypatch):
    monkeypatch.setenv("GEMINI_MEDIA_TELEMETRY", "1")
    reporter = InMemoryReporter()
    tele = TelemetryContext(reporter)

    with tele("supervisor.request", request_id=1):
        with tele("supervisor.attempt", attempt=0) as ctx:
            ctx.count("calls")

    assert set(reporter.timings) == {
        "supervisor.request",
        "supervisor.request.supervisor.attempt",
    }
    ((value, metadata),) = reporter.metrics["supervisor.request.supervisor.attempt.calls"]
    assert value == 1
    assert metadata["metric_type"] == "counter"
    assert "Telemetry Report" in reporter.get_report()


def test_failing_reporter_does_not_break_caller(monkeypatch):
    monkeypatch.setenv("DEBUG", "1")

    class Broken:
        def record_timing(self, scope, duration, **metadata):
            raise RuntimeError("disk full")

        def record_metric(self, scope, value, **metadata):
            raise RuntimeError("disk full")

    healthy = InMemoryReporter()
    tele = TelemetryContext(Broken(), healthy)

    with tele("upload.submit") as ctx:
        ctx.gauge("size_bytes", 10)

    assert "upload.submit" in healthy.timings


def test_scope_name_must_be_non_empty(monkeypatch):
    monkeypatch.setenv("GEMINI_MEDIA_TELEMETRY", "1")
    tele = TelemetryContext(InMemoryReporter())
    with pytest.raises(ValueError):
        with tele(""):
            pass
