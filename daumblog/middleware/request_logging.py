"""Request logging middleware for structured logging."""

import logging
import time
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from daumblog.utils.logging import get_logger, reset_request_id, set_request_id

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its duration and tags the response with an id."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid4())
        request.state.request_id = request_id
        # Scoped to this request's context, so concurrent requests keep their own id.
        token = set_request_id(request_id)

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"
        start_time = time.perf_counter()

        try:
            try:
                response = await call_next(request)
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    f"{method} {path} ERROR: {e}",
                    extra={
                        "request_id": request_id,
                        "endpoint": path,
                        "method": method,
                        "status_code": 500,
                        "duration_ms": round(duration_ms, 2),
                        "client_ip": client_ip,
                        "error": str(e),
                    },
                    exc_info=True,
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            status_code = response.status_code
            logger.log(
                logging.INFO if status_code < 400 else logging.WARNING,
                f"{method} {path} {status_code}",
                extra={
                    "request_id": request_id,
                    "endpoint": path,
                    "method": method,
                    "status_code": status_code,
                    "duration_ms": round(duration_ms, 2),
                    "client_ip": client_ip,
                },
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            reset_request_id(token)
