"""Logging middleware for request/response tracking."""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from userdirectory.core.logging import get_logger, log_event

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with a request id and its duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        request_info = {
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_host": request.client.host if request.client else None,
            "request_id": request_id,
        }

        log_event(logger, "info", "request_started", **request_info)

        try:
            response = await call_next(request)
        except Exception as e:
            log_event(
                logger,
                "error",
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_seconds=time.perf_counter() - start_time,
                **request_info,
            )
            raise

        duration = time.perf_counter() - start_time
        log_event(
            logger,
            "info",
            "request_completed",
            status_code=response.status_code,
            duration_seconds=duration,
            **request_info,
        )

        response.headers["X-Process-Time"] = str(duration)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
