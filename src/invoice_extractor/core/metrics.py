from __future__ import annotations

import inspect
import time
from functools import wraps
from typing import Callable

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.requests import Request
from starlette.responses import Response


REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "path", "status"),
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    labelnames=("method", "path"),
)

EXTRACTION_TOTAL = Counter(
    "extractions_total",
    "Total extractions by strategy and outcome",
    labelnames=("strategy", "outcome"),
)

EXTRACTION_DURATION = Histogram(
    "extraction_duration_seconds",
    "Extraction duration in seconds",
    labelnames=("strategy",),
)


async def metrics_endpoint(_: Request) -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


async def metrics_middleware(request: Request, call_next):  # type: ignore[no-untyped-def]
    method = request.method.upper()
    path = request.url.path
    start = time.perf_counter()
    response: Response | None = None
    try:
        response = await call_next(request)
        return response
    finally:
        dur = time.perf_counter() - start
        REQUEST_LATENCY.labels(method=method, path=path).observe(dur)
        status_str = str(getattr(response, "status_code", 500))
        REQUEST_COUNT.labels(method=method, path=path, status=status_str).inc()


def observe_extraction(strategy: str) -> Callable:
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def async_wrapper(*args, **kwargs):  # type: ignore[no-untyped-def]
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
                EXTRACTION_TOTAL.labels(strategy=strategy, outcome="success").inc()
                return result
            except Exception:
                EXTRACTION_TOTAL.labels(strategy=strategy, outcome="failure").inc()
                raise
            finally:
                EXTRACTION_DURATION.labels(strategy=strategy).observe(time.perf_counter() - start)

        @wraps(func)
        def sync_wrapper(*args, **kwargs):  # type: ignore[no-untyped-def]
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
                EXTRACTION_TOTAL.labels(strategy=strategy, outcome="success").inc()
                return result
            except Exception:
                EXTRACTION_TOTAL.labels(strategy=strategy, outcome="failure").inc()
                raise
            finally:
                EXTRACTION_DURATION.labels(strategy=strategy).observe(time.perf_counter() - start)

        return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper

    return decorator
