"""Request context middleware.

Binds the request ID and the target shop into the structlog context so every
stage log line of a provisioning run can be correlated, and turns exceptions
no handler claimed into the standard error envelope.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"
SHOP_DOMAIN_HEADER = "X-Shopify-Shop-Domain"


def error_envelope(
    status_code: int,
    error_code: str,
    message: str,
    request_id: str | None,
    details: list | None = None,
) -> JSONResponse:
    """Render the error body shared by every failure response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or [],
            "request_id": request_id,
        },
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Per-request log context, timing, and last-resort error handling.

    The request ID is taken from ``X-Request-ID`` when the caller sends one
    and echoed back on the response. The access token header is never
    bound.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        context = {"request_id": request_id}
        shop = request.headers.get(SHOP_DOMAIN_HEADER)
        if shop:
            context["shop"] = shop
        structlog.contextvars.bind_contextvars(**context)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            response = error_envelope(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_ERROR",
                "An internal error occurred",
                request_id,
            )
        finally:
            structlog.contextvars.unbind_contextvars(*context)

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            request_id=request_id,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install request context handling on the application."""
    app.add_middleware(RequestContextMiddleware)
