"""Bulk variant creation."""

from typing import Any

import structlog

from provisioner.catalog.connection import ShopConnection, user_errors
from provisioner.catalog.documents import VARIANTS_BULK_CREATE
from provisioner.catalog.options import OptionIndex
from provisioner.domain.exceptions import IntegrityError, ValidationError
from provisioner.domain.remote import RemoteVariant
from provisioner.domain.results import StageResult
from provisioner.domain.submission import ProductSubmission, Variant

logger = structlog.get_logger()

# Replaces the variant Shopify creates alongside the product
BULK_CREATE_STRATEGY = "REMOVE_STANDALONE_VARIANT"


def build_variant_input(
    variant: Variant,
    index: OptionIndex,
    location_id: str | None,
) -> dict[str, Any]:
    """Build one ``ProductVariantsBulkInput`` entry.

    Args:
        variant: Submitted variant.
        index: Option lookup for the created product.
        location_id: Location to stock the starting quantity at, or None
            when inventory is set in a separate step.

    Returns:
        Variant input payload.
    """
    entry: dict[str, Any] = {
        "price": variant.price,
        "inventoryItem": {"sku": variant.sku, "tracked": True},
        "optionValues": [link.to_input() for link in index.links_for(variant)],
    }
    if location_id is not None and variant.inventory_quantity is not None:
        entry["inventoryQuantities"] = [
            {
                "availableQuantity": variant.inventory_quantity,
                "locationId": location_id,
            }
        ]
    return entry


class VariantProvisioner:
    """Creates every variant of a product in one bulk call."""

    def __init__(self, connection: ShopConnection) -> None:
        self.connection = connection

    async def provision(
        self,
        product_id: str,
        submission: ProductSubmission,
        index: OptionIndex,
        location_id: str | None = None,
    ) -> StageResult[dict[str, RemoteVariant]]:
        """Submit ``productVariantsBulkCreate``.

        Args:
            product_id: Remote product gid.
            submission: Product submission.
            index: Option lookup for the created product.
            location_id: Location binding starting inventory, if any.

        Returns:
            StageResult with created variants keyed by SKU.
        """
        variants = [build_variant_input(v, index, location_id) for v in submission.variants]

        data = await self.connection.execute(
            VARIANTS_BULK_CREATE,
            {
                "productId": product_id,
                "variants": variants,
                "strategy": BULK_CREATE_STRATEGY,
            },
        )
        payload = data.get("productVariantsBulkCreate") or {}

        errors = user_errors(payload)
        if errors:
            return StageResult.failed(ValidationError("productVariantsBulkCreate", errors))

        created = payload.get("productVariants")
        if created is None:
            return StageResult.failed(
                IntegrityError("productVariantsBulkCreate", "productVariants")
            )

        by_sku = {}
        for node in created:
            if not node or not node.get("id"):
                continue
            remote = RemoteVariant.from_api_response(node)
            if remote.sku:
                by_sku[remote.sku] = remote

        logger.info(
            "Created variants",
            shop=self.connection.shop_domain,
            product_id=product_id,
            requested=len(variants),
            created=len(by_sku),
            with_inventory=location_id is not None,
        )
        return StageResult.ok(by_sku)
