"""In-memory app metrics: request latency, error rate and mentor fallback rate, with alerts."""
from __future__ import annotations

import time
from collections import Counter, deque
from threading import Lock

from starlette.requests import Request
from starlette.responses import Response

# Rolling window size for latency percentiles
_LATENCY_WINDOW = 500
# Alert thresholds
_ERROR_RATE_ALERT_THRESHOLD = 0.10  # 10%
_LATENCY_P95_ALERT_MS = 2000  # 2 seconds
_FALLBACK_RATE_ALERT_THRESHOLD = 0.50
_FALLBACK_ALERT_MIN_CALLS = 5

_lock = Lock()
_request_count = 0
_error_count = 0
_latencies: deque[float] = deque(maxlen=_LATENCY_WINDOW)
_mentor_outcomes: Counter[tuple[str, str]] = Counter()


def record_request(duration_sec: float, is_error: bool) -> None:
    with _lock:
        global _request_count, _error_count
        _request_count += 1
        if is_error:
            _error_count += 1
        _latencies.append(duration_sec)


def record_mentor_outcome(operation: str, source: str) -> None:
    with _lock:
        _mentor_outcomes[(operation, source)] += 1


def get_mentor_metrics() -> dict:
    with _lock:
        outcomes = dict(_mentor_outcomes)
    by_operation: dict[str, dict[str, int]] = {}
    for (operation, source), count in sorted(outcomes.items()):
        by_operation.setdefault(operation, {})[source] = count
    total = sum(outcomes.values())
    fallbacks = sum(count for (_op, source), count in outcomes.items() if source == "fallback")
    return {
        "mentor_calls": total,
        "mentor_fallbacks": fallbacks,
        "fallback_rate": round(fallbacks / total, 4) if total else 0.0,
        "by_operation": by_operation,
    }


def get_metrics() -> dict:
    with _lock:
        total = _request_count
        errors = _error_count
        latencies = list(_latencies)

    error_rate = (errors / total) if total else 0.0
    latency_ms_p50: float | None = None
    latency_ms_p95: float | None = None
    if latencies:
        sorted_ms = sorted(lat * 1000 for lat in latencies)
        n = len(sorted_ms)
        latency_ms_p50 = sorted_ms[int((n - 1) * 0.50)]
        latency_ms_p95 = sorted_ms[int((n - 1) * 0.95)]

    mentor = get_mentor_metrics()
    alerts: list[str] = []
    if total and error_rate >= _ERROR_RATE_ALERT_THRESHOLD:
        alerts.append("high_error_rate")
    if latency_ms_p95 is not None and latency_ms_p95 >= _LATENCY_P95_ALERT_MS:
        alerts.append("high_latency_p95")
    if mentor["mentor_calls"] >= _FALLBACK_ALERT_MIN_CALLS and mentor["fallback_rate"] >= _FALLBACK_RATE_ALERT_THRESHOLD:
        alerts.append("high_fallback_rate")

    return {
        "request_count": total,
        "error_count": errors,
        "error_rate": round(error_rate, 4),
        "latency_ms_p50": round(latency_ms_p50, 2) if latency_ms_p50 is not None else None,
        "latency_ms_p95": round(latency_ms_p95, 2) if latency_ms_p95 is not None else None,
        "mentor": mentor,
        "alerts": alerts,
    }


def reset_metrics() -> None:
    """Reset counters (e.g. for tests)."""
    with _lock:
        global _request_count, _error_count
        _request_count = 0
        _error_count = 0
        _latencies.clear()
        _mentor_outcomes.clear()


async def metrics_middleware(request: Request, call_next) -> Response:
    """Record request duration and status for app metrics (skips /health and /metrics)."""
    path = request.url.path
    if path == "/health" or path.startswith("/metrics"):
        return await call_next(request)
    start = time.perf_counter()
    response = await call_next(request)
    duration = time.perf_counter() - start
    record_request(duration, response.status_code >= 400)
    return response
