"""
Middleware for request logging and response headers.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from bookclub.core.logging import get_logger, profile_id_var, request_id_var

logger = get_logger(__name__)

# Load balancer probes, not worth a log line each
QUIET_PATHS = ("/health", "/health/ready")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id and log its outcome.

    A client-supplied X-Request-ID is kept so traces line up with the
    frontend; otherwise a fresh one is generated.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request_id_var.set(request_id)
        profile_id_var.set(None)

        quiet = request.url.path in QUIET_PATHS
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"{request.method} {request.url.path} raised {type(e).__name__}",
                extra={
                    "extra_fields": {
                        "method": request.method,
                        "path": request.url.path,
                        "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                    }
                },
                exc_info=True,
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        if not quiet:
            level = logger.warning if response.status_code >= 500 else logger.info
            level(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "extra_fields": {
                        "method": request.method,
                        "path": request.url.path,
                        "query": str(request.query_params) or None,
                        "status_code": response.status_code,
                        "elapsed_ms": round(elapsed_ms, 2),
                    }
                },
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response
