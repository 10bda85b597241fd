"""
Request ID middleware for request correlation.

- Generates or accepts X-Request-ID header
- Stores in request.state and response headers
- Sets context var so request_id is available in logs throughout the request
- Logs one line per request with method, path, status and duration
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ferryapp.logging_config import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SLOW_REQUEST_MS = 1000


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Assign a unique request ID to each request for correlation across logs.

    - Accepts X-Request-ID from client if present
    - Otherwise generates a new UUID
    - Adds X-Request-ID to response headers
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER)
        request_id = incoming if incoming else str(uuid.uuid4())

        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            start = time.perf_counter()
            response = await call_next(request)
            duration_ms = round((time.perf_counter() - start) * 1000, 1)

            response.headers[REQUEST_ID_HEADER] = request_id

            fields = {
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": duration_ms,
            }
            # Identity is set by the auth dependency on authenticated routes
            identity_key = getattr(request.state, "identity_key", None)
            if identity_key:
                fields["rif_cedula"] = identity_key

            if duration_ms > SLOW_REQUEST_MS:
                logger.warning("Slow request", extra=fields)
            else:
                logger.info("Request handled", extra=fields)

            return response
        finally:
            request_id_var.reset(token)
