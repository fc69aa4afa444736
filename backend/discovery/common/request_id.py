"""Request ID middleware and utilities."""

import time
import uuid
from typing import Any, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from discovery.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time-Ms"

# Probes are polled constantly; keep them out of the request log.
QUIET_PATHS = frozenset({"/health", "/ready"})


def _request_fields(request: Request, request_id: str) -> dict[str, Any]:
    return {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
    }


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assign a request ID, echo it back, and log each catalog request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        quiet = request.url.path in QUIET_PATHS

        start_time = time.time()
        if not quiet:
            logger.info(
                "Request started",
                extra={
                    **_request_fields(request, request_id),
                    "query_params": str(request.query_params),
                },
            )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    **_request_fields(request, request_id),
                    "status_code": 500,
                    "latency_ms": int((time.time() - start_time) * 1000),
                    "error": str(e),
                },
                exc_info=True,
            )
            raise

        elapsed_ms = int((time.time() - start_time) * 1000)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[RESPONSE_TIME_HEADER] = str(elapsed_ms)

        if not quiet:
            logger.info(
                "Request completed",
                extra={
                    **_request_fields(request, request_id),
                    "status_code": response.status_code,
                    "latency_ms": elapsed_ms,
                },
            )

        return response
