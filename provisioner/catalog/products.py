"""Product creation, listing, and removal."""

from typing import Any

import structlog

from provisioner.catalog.connection import ShopConnection, user_errors
from provisioner.catalog.documents import PRODUCT_CREATE, PRODUCT_DELETE, PRODUCTS_LIST
from provisioner.domain.exceptions import IntegrityError, ValidationError
from provisioner.domain.remote import RemoteProduct
from provisioner.domain.results import StageResult
from provisioner.domain.submission import ProductSubmission

logger = structlog.get_logger()

# Shopify rejects an option without values
PLACEHOLDER_OPTION_VALUE = "Default"

MAX_PAGE_SIZE = 250


def build_product_options(submission: ProductSubmission) -> list[dict[str, Any]]:
    """Build the ``productOptions`` input.

    Each option carries the distinct values variants actually use at its
    position, in order of first appearance. A position no variant fills
    gets a single placeholder value.

    Args:
        submission: Product submission.

    Returns:
        List of ``{"name": ..., "values": [{"name": ...}]}`` entries.
    """
    options = []
    for position, name in enumerate(submission.option_names):
        values = submission.values_at(position) or [PLACEHOLDER_OPTION_VALUE]
        options.append({"name": name, "values": [{"name": v} for v in values]})
    return options


def build_product_input(submission: ProductSubmission) -> dict[str, Any]:
    """Build the ``ProductCreateInput`` payload."""
    product: dict[str, Any] = {
        "title": submission.title,
        "descriptionHtml": submission.description,
        "vendor": submission.vendor,
        "productType": submission.product_type,
        "productOptions": build_product_options(submission),
    }
    if submission.tags:
        product["tags"] = list(submission.tags)
    return product


class ProductCreator:
    """Creates the product together with its option schema."""

    def __init__(self, connection: ShopConnection) -> None:
        self.connection = connection

    async def create(self, submission: ProductSubmission) -> StageResult[RemoteProduct]:
        """Submit ``productCreate``.

        Args:
            submission: Product submission.

        Returns:
            StageResult with the created product, or a ValidationError for
            remote field errors, or an IntegrityError when no id came back.
        """
        data = await self.connection.execute(
            PRODUCT_CREATE, {"product": build_product_input(submission)}
        )
        payload = data.get("productCreate") or {}

        errors = user_errors(payload)
        if errors:
            return StageResult.failed(ValidationError("productCreate", errors))

        product = payload.get("product") or {}
        if not product.get("id"):
            return StageResult.failed(IntegrityError("productCreate", "Product ID"))

        remote = RemoteProduct.from_api_response(product)
        logger.info(
            "Created product",
            shop=self.connection.shop_domain,
            product_id=remote.id,
            handle=remote.handle,
            option_count=len(remote.options),
        )
        return StageResult.ok(remote)


class ProductRemover:
    """Deletes a product, used to discard a partially provisioned one."""

    def __init__(self, connection: ShopConnection) -> None:
        self.connection = connection

    async def delete(self, product_id: str) -> StageResult[str]:
        """Submit ``productDelete``.

        Args:
            product_id: Remote product gid.

        Returns:
            StageResult with the deleted product id.
        """
        data = await self.connection.execute(PRODUCT_DELETE, {"input": {"id": product_id}})
        payload = data.get("productDelete") or {}

        errors = user_errors(payload)
        if errors:
            return StageResult.failed(ValidationError("productDelete", errors))

        return StageResult.ok(payload.get("deletedProductId") or product_id)


class ProductLister:
    """Read-only listing of a shop's products, newest first."""

    def __init__(self, connection: ShopConnection) -> None:
        self.connection = connection

    async def list_products(self, limit: int = 50) -> StageResult[list[dict[str, Any]]]:
        """Fetch up to ``limit`` products.

        Args:
            limit: Page size, clamped to 1..250.

        Returns:
            StageResult with product nodes.
        """
        first = max(1, min(limit, MAX_PAGE_SIZE))
        data = await self.connection.execute(PRODUCTS_LIST, {"first": first})
        nodes = (data.get("products") or {}).get("nodes") or []
        return StageResult.ok(list(nodes))
