"""Product provisioning endpoints.

- POST /shopify/products - provision a product with variants, inventory and media
- GET /shopify/products - list existing products

Both endpoints act on the shop named by ``X-Shopify-Shop-Domain`` using the
token in ``X-Shopify-Access-Token``.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from provisioner.api.schemas import (
    ErrorResponse,
    ProductCreateRequest,
    ProductCreateResponse,
    ProductsListResponse,
    ProductSummarySchema,
)
from provisioner.application.provisioning_service import (
    ProvisioningService,
    get_provisioning_service,
)
from provisioner.infrastructure.database import get_session

router = APIRouter(prefix="/shopify/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


@dataclass(frozen=True)
class ShopCredentials:
    """Shop domain and access token taken from request headers."""

    shop_domain: str
    access_token: str


def get_shop_credentials(
    shop_domain: Annotated[str | None, Header(alias="X-Shopify-Shop-Domain")] = None,
    access_token: Annotated[str | None, Header(alias="X-Shopify-Access-Token")] = None,
) -> ShopCredentials:
    """Require both Shopify headers."""
    if not shop_domain or not access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error_code": "MISSING_SHOP_HEADERS",
                "message": "Missing Shopify headers.",
            },
        )
    return ShopCredentials(shop_domain=shop_domain, access_token=access_token)


def get_service(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProvisioningService:
    """Get provisioning service with request ID."""
    request_id = getattr(request.state, "request_id", None)
    return get_provisioning_service(session=session, request_id=request_id)


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ProductCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Provision product",
    description="Create a product with options, variants, inventory and variant media.",
)
async def create_product(
    body: ProductCreateRequest,
    credentials: Annotated[ShopCredentials, Depends(get_shop_credentials)],
    service: Annotated[ProvisioningService, Depends(get_service)],
) -> ProductCreateResponse:
    """Provision a product into the shop.

    Provisioning failures propagate as ``ProvisioningError`` and are
    rendered by the application's exception handlers.

    Args:
        body: Product submission.
        credentials: Shop domain and access token.
        service: Provisioning service.

    Returns:
        Everything created for the product.
    """
    result = await service.provision(
        credentials.shop_domain,
        credentials.access_token,
        body.to_submission(),
    )
    return ProductCreateResponse.from_result(result)


@router.get(
    "",
    response_model=ProductsListResponse,
    responses={
        401: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="List products",
    description="List the shop's existing products, newest first.",
)
async def list_products(
    credentials: Annotated[ShopCredentials, Depends(get_shop_credentials)],
    service: Annotated[ProvisioningService, Depends(get_service)],
    limit: int = Query(default=50, ge=1, le=250, description="Maximum products"),
) -> ProductsListResponse:
    """List existing products.

    Args:
        credentials: Shop domain and access token.
        service: Provisioning service.
        limit: Maximum number of products.

    Returns:
        Product summaries.
    """
    nodes = await service.list_products(
        credentials.shop_domain, credentials.access_token, limit=limit
    )
    products = [ProductSummarySchema.model_validate(node) for node in nodes]
    return ProductsListResponse(products=products, total=len(products))
