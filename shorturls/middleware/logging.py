"""
Request logging middleware for FastAPI using Loguru.

Tags every response with an ``X-Request-ID`` header and writes one
``REQUEST`` level line per request.
"""

import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware


def get_client_ip(request: Request) -> str:
    """Return the client IP, preferring the first ``X-Forwarded-For`` hop."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else "unknown"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status, latency and client IP for each request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start_time = time.perf_counter()
        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)

        logger.log(
            "REQUEST",
            "{method} {path} {status_code} {process_time_ms}ms {client_ip} {request_id}",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=process_time_ms,
            client_ip=get_client_ip(request),
            request_id=request_id,
        )
        return response


def add_logging_middleware(app) -> None:
    """Add the request logging middleware to the FastAPI application."""
    app.add_middleware(LoggingMiddleware)
