"""Product Provisioner API application.

Wires the routers, the request context middleware and the handlers that
render provisioning failures as HTTP errors.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request

from provisioner.api.health import router as health_router
from provisioner.api.middleware import error_envelope, setup_middleware
from provisioner.api.products import router as products_router
from provisioner.domain.exceptions import ProvisioningError, ValidationError
from provisioner.infrastructure.config import settings
from provisioner.infrastructure.database import init_models
from provisioner.infrastructure.log_config import configure_logging
from provisioner.infrastructure.shopify_client import close_shopify_client

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging and the local schema, and close the Shopify client on exit."""
    configure_logging(settings.log_level)
    logger.info(
        "Starting Product Provisioner API",
        version=settings.api_version,
        debug=settings.debug,
        shopify_api_version=settings.shopify_api_version,
        inventory_strategy=settings.inventory_strategy,
        failure_policy=settings.failure_policy,
    )

    if settings.database_url.startswith("sqlite"):
        await init_models()

    yield

    await close_shopify_client()
    logger.info("Shutting down Product Provisioner API")


app = FastAPI(
    title="Product Provisioner API",
    description="Provisions Shopify products with variants, inventory and media",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request ID, shop log context, last-resort errors
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)


# ============================================================================
# Exception Handlers
# ============================================================================


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _error_details(exc: ProvisioningError) -> list:
    """Details list for the error envelope."""
    if isinstance(exc, ValidationError):
        # userErrors fields are paths such as ["variants", "0", "price"]
        return [
            {
                "field": ".".join(map(str, e.get("field") or [])) or None,
                "message": e.get("message", ""),
            }
            for e in exc.user_errors
        ]
    return [exc.details] if exc.details else []


@app.exception_handler(ProvisioningError)
async def provisioning_exception_handler(request: Request, exc: ProvisioningError):
    """Map provisioning failures to their HTTP status."""
    logger.warning(
        "Provisioning failed",
        path=request.url.path,
        error_code=exc.error_code,
        error=exc.message,
    )
    return error_envelope(
        exc.status_code,
        exc.error_code,
        exc.message,
        _request_id(request),
        _error_details(exc),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Render HTTP exceptions raised by dependencies in the same envelope."""
    detail = exc.detail if isinstance(exc.detail, dict) else {"message": str(exc.detail)}
    return error_envelope(
        exc.status_code,
        detail.get("error_code", "ERROR"),
        detail.get("message", ""),
        _request_id(request),
        detail.get("details"),
    )
