"""
Monitoring middleware: request ids, request logging and Prometheus metrics.
"""
import re
import time
import uuid
from typing import Callable
from fastapi import FastAPI, Request, Response
from loguru import logger
from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST


http_requests_total = Counter(
    'assistant_http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'assistant_http_request_duration_seconds',
    'HTTP request duration in seconds (time to first byte for streams)',
    ['method', 'endpoint'],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0)
)

active_requests = Gauge(
    'assistant_active_requests',
    'Number of requests being handled'
)

active_sessions = Gauge(
    'assistant_conversation_sessions',
    'Number of conversation sessions held in memory'
)

llm_requests_total = Counter(
    'assistant_llm_requests_total',
    'Total backend calls made by providers',
    ['provider', 'model', 'operation', 'status']
)

llm_request_duration_seconds = Histogram(
    'assistant_llm_request_duration_seconds',
    'Backend call duration in seconds',
    ['provider', 'model', 'operation'],
    buckets=(0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0, 120.0)
)


def add_monitoring_middleware(app: FastAPI):
    """
    Attach request tracing middleware and the ``/metrics`` endpoint.
    """

    @app.middleware("http")
    async def monitoring_middleware(request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()
        endpoint = normalize_endpoint(request.url.path)

        active_requests.inc()
        with logger.contextualize(request_id=request_id):
            logger.info(f"Request started: {request.method} {request.url.path}")
            try:
                response = await call_next(request)
            except Exception:
                http_requests_total.labels(method=request.method, endpoint=endpoint, status=500).inc()
                logger.exception(f"Request failed: {request.method} {request.url.path}")
                raise
            finally:
                active_requests.dec()

            duration = time.time() - start_time
            http_requests_total.labels(method=request.method, endpoint=endpoint, status=response.status_code).inc()
            http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(duration)

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration:.3f}"
            logger.info(
                f"Request completed: {request.method} {request.url.path} "
                f"status={response.status_code} duration={duration:.4f}s"
            )
            return response

    @app.get("/metrics", include_in_schema=False, tags=["monitoring"])
    async def metrics():
        """Prometheus metrics endpoint."""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST,
            headers={"Cache-Control": "no-cache, no-store, must-revalidate"}
        )


def normalize_endpoint(path: str) -> str:
    """
    Replace path parameters so metric label cardinality stays bounded.

    - /api/ai/sessions/5f0c...-... -> /api/ai/sessions/{id}
    """
    path = re.sub(r'/[a-fA-F0-9\-]{36}', '/{id}', path)
    path = re.sub(r'/\d+', '/{id}', path)
    return path


def record_llm_request(provider: str, model: str, operation: str, duration: float, success: bool):
    """Record metrics for one backend call."""
    status = "success" if success else "error"
    llm_requests_total.labels(provider=provider, model=model, operation=operation, status=status).inc()
    if duration > 0:
        llm_request_duration_seconds.labels(provider=provider, model=model, operation=operation).observe(duration)


def update_active_sessions(count: int):
    """Update the conversation sessions gauge."""
    active_sessions.set(count)
