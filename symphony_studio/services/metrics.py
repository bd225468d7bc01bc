"""CloudWatch custom metrics emitter with background batching.

Publishes two families of metrics:

* ``ExternalAPI/*`` — count, latency and errors for every call to the
  Anthropic API made by the tool-calling loop.
* ``Tools/*`` — one count per catalog operation dispatched (from the model
  or from the discovery endpoint), split by whether the lookup found a
  record.

Design
------
* Metrics are collected in a thread-safe in-memory buffer.
* A daemon thread flushes the buffer to CloudWatch every
  ``FLUSH_INTERVAL_SECONDS`` (default 60 s).
* When running locally (``METRICS_ENABLED != "true"``), metrics are
  logged at DEBUG level but **not** pushed to CloudWatch.
* Each ``put_metric_data`` call sends up to 1 000 metric data points
  (the CloudWatch API limit per request).

Usage
-----
>>> from symphony_studio.services.metrics import metrics
>>> metrics.record_success("anthropic", "llm_invoke", latency_ms=812.0)
>>> metrics.record_tool_call("get_pricing", found=True, latency_ms=0.4)
"""

from __future__ import annotations

import atexit
import logging
import os
import threading
import time
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)

NAMESPACE = "SymphonyStudio"
FLUSH_INTERVAL_SECONDS = 60
MAX_BATCH_SIZE = 1_000  # CloudWatch API limit per PutMetricData call


class MetricsClient:
    """Batched CloudWatch metrics publisher."""

    def __init__(self) -> None:
        self._enabled = os.getenv("METRICS_ENABLED", "false").lower() == "true"
        self._buffer: list[dict[str, Any]] = []
        self._lock = threading.Lock()
        self._cw_client = None  # lazy-init

        if self._enabled:
            self._start_flush_thread()

    def _get_cw_client(self):
        if self._cw_client is None:
            import boto3

            self._cw_client = boto3.client("cloudwatch")
        return self._cw_client

    # ── External API calls ────────────────────────────────────────────

    def record_success(self, service: str, operation: str, latency_ms: float) -> None:
        """Record a successful call to an external service."""
        now = datetime.now(UTC)
        self._append(_datum(
            "ExternalAPI/RequestCount", now, 1, "Count",
            Service=service, Status="success",
        ))
        self._append(_datum(
            "ExternalAPI/Latency", now, latency_ms, "Milliseconds",
            Service=service, Operation=operation,
        ))
        logger.debug("Metric: %s %s success latency=%.1fms", service, operation, latency_ms)

    def record_failure(
        self,
        service: str,
        operation: str,
        error_type: str,
        latency_ms: float = 0,
    ) -> None:
        """Record a failed call to an external service."""
        now = datetime.now(UTC)
        self._append(_datum(
            "ExternalAPI/RequestCount", now, 1, "Count",
            Service=service, Status="failure",
        ))
        self._append(_datum(
            "ExternalAPI/ErrorCount", now, 1, "Count",
            Service=service, ErrorType=error_type,
        ))
        if latency_ms > 0:
            self._append(_datum(
                "ExternalAPI/Latency", now, latency_ms, "Milliseconds",
                Service=service, Operation=operation,
            ))
        logger.debug(
            "Metric: %s %s failure error=%s latency=%.1fms",
            service, operation, error_type, latency_ms,
        )

    # ── Catalog tool calls ────────────────────────────────────────────

    def record_tool_call(self, tool: str, *, found: bool, latency_ms: float = 0) -> None:
        """Record one dispatched catalog operation."""
        now = datetime.now(UTC)
        outcome = "found" if found else "not_found"
        self._append(_datum("Tools/CallCount", now, 1, "Count", Tool=tool, Outcome=outcome))
        if latency_ms > 0:
            self._append(_datum("Tools/Latency", now, latency_ms, "Milliseconds", Tool=tool))
        logger.debug("Metric: tool %s %s latency=%.2fms", tool, outcome, latency_ms)

    # ── Flushing ──────────────────────────────────────────────────────

    def flush(self) -> int:
        """Send buffered metrics to CloudWatch.  Returns count sent."""
        with self._lock:
            if not self._buffer:
                return 0
            batch = self._buffer[:]
            self._buffer.clear()

        if not self._enabled:
            logger.debug("Metrics flush skipped (not enabled): %d items", len(batch))
            return 0

        sent = 0
        try:
            cw = self._get_cw_client()
            for i in range(0, len(batch), MAX_BATCH_SIZE):
                chunk = batch[i : i + MAX_BATCH_SIZE]
                cw.put_metric_data(Namespace=NAMESPACE, MetricData=chunk)
                sent += len(chunk)
            logger.info("Flushed %d metrics to CloudWatch", sent)
        except Exception:
            logger.exception("Failed to flush metrics to CloudWatch")
        return sent

    def _append(self, metric_data: dict[str, Any]) -> None:
        with self._lock:
            self._buffer.append(metric_data)

    def _start_flush_thread(self) -> None:
        """Start a daemon thread that flushes metrics periodically."""

        def _loop():
            while True:
                time.sleep(FLUSH_INTERVAL_SECONDS)
                try:
                    self.flush()
                except Exception:
                    logger.exception("Metrics flush thread error")

        t = threading.Thread(target=_loop, daemon=True, name="metrics-flush")
        t.start()
        atexit.register(self.flush)
        logger.info("Metrics flush thread started (interval=%ds)", FLUSH_INTERVAL_SECONDS)


def _datum(name: str, timestamp: datetime, value: float, unit: str, **dimensions: str) -> dict[str, Any]:
    return {
        "MetricName": name,
        "Dimensions": [{"Name": k, "Value": v} for k, v in dimensions.items()],
        "Timestamp": timestamp,
        "Value": value,
        "Unit": unit,
    }


# ── Module-level singleton ──────────────────────────────────────────
metrics = MetricsClient()
