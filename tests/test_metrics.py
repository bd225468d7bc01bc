"""Tests for the CloudWatch metrics client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from symphony_studio.services.metrics import MetricsClient


def _make_client(*, enabled: bool = False) -> MetricsClient:
    with patch.dict("os.environ", {"METRICS_ENABLED": str(enabled).lower()}):
        return MetricsClient()


def _dims(metric: dict) -> dict:
    return {d["Name"]: d["Value"] for d in metric["Dimensions"]}


class TestMetricsRecording:
    """Verify that the record_* helpers buffer the right data."""

    def test_record_success_appends_two_data_points(self):
        client = _make_client()
        client.record_success("anthropic", "llm_invoke", latency_ms=123.4)
        names = {m["MetricName"] for m in client._buffer}
        assert names == {"ExternalAPI/RequestCount", "ExternalAPI/Latency"}

    def test_record_failure_without_latency(self):
        client = _make_client()
        client.record_failure("anthropic", "llm_invoke", error_type="APITimeoutError")
        names = {m["MetricName"] for m in client._buffer}
        assert names == {"ExternalAPI/RequestCount", "ExternalAPI/ErrorCount"}
        error_metric = next(m for m in client._buffer if m["MetricName"] == "ExternalAPI/ErrorCount")
        assert _dims(error_metric)["ErrorType"] == "APITimeoutError"

    def test_record_failure_with_latency_appends_three_data_points(self):
        client = _make_client()
        client.record_failure("anthropic", "llm_invoke", error_type="RuntimeError", latency_ms=500.0)
        assert len(client._buffer) == 3

    def test_tool_call_dimensions(self):
        client = _make_client()
        client.record_tool_call("get_pricing", found=True, latency_ms=0.5)
        client.record_tool_call("get_faq", found=False)
        counts = [m for m in client._buffer if m["MetricName"] == "Tools/CallCount"]
        assert [_dims(m) for m in counts] == [
            {"Tool": "get_pricing", "Outcome": "found"},
            {"Tool": "get_faq", "Outcome": "not_found"},
        ]
        latencies = [m for m in client._buffer if m["MetricName"] == "Tools/Latency"]
        assert len(latencies) == 1

    def test_dispatcher_records_tool_calls(self):
        with patch("symphony_studio.tools.registry.metrics") as mock_metrics:
            from symphony_studio.tools.registry import execute

            execute("get_services", {"service_id": "nope"})
            execute("get_weather")
        calls = mock_metrics.record_tool_call.call_args_list
        assert calls[0].args == ("get_services",)
        assert calls[0].kwargs["found"] is False
        assert calls[1].args == ("get_weather",)


class TestMetricsFlush:
    """Verify flush behaviour with and without CloudWatch enabled."""

    def test_flush_when_disabled_sends_nothing_and_clears(self):
        client = _make_client()
        client.record_tool_call("get_contact", found=True, latency_ms=1.0)
        assert client.flush() == 0
        assert client._buffer == []

    def test_flush_when_enabled_calls_put_metric_data(self):
        with patch.object(MetricsClient, "_start_flush_thread"):
            client = _make_client(enabled=True)
        mock_cw = MagicMock()
        client._cw_client = mock_cw

        client.record_success("anthropic", "llm_invoke", latency_ms=100.0)
        assert client.flush() == 2
        kwargs = mock_cw.put_metric_data.call_args.kwargs
        assert kwargs["Namespace"] == "SymphonyStudio"
        assert len(kwargs["MetricData"]) == 2

    def test_flush_error_is_logged_not_raised(self):
        with patch.object(MetricsClient, "_start_flush_thread"):
            client = _make_client(enabled=True)
        client._cw_client = MagicMock()
        client._cw_client.put_metric_data.side_effect = RuntimeError("throttled")
        client.record_tool_call("get_faq", found=True)
        assert client.flush() == 0

    def test_flush_empty_buffer_returns_zero(self):
        assert _make_client().flush() == 0
