"""Inventory activation.

Used when variants are created without starting inventory: stock is then
activated at the shop's primary location, one call per variant.
"""

import structlog

from provisioner.catalog.connection import ShopConnection, user_errors
from provisioner.catalog.documents import INVENTORY_ACTIVATE, PRIMARY_LOCATION
from provisioner.domain.exceptions import IntegrityError
from provisioner.domain.remote import RemoteVariant
from provisioner.domain.results import StageResult
from provisioner.domain.submission import ProductSubmission

logger = structlog.get_logger()


class InventorySetter:
    """Activates starting inventory for created variants."""

    def __init__(self, connection: ShopConnection) -> None:
        self.connection = connection

    async def primary_location_id(self) -> StageResult[str]:
        """Look up the shop's primary location."""
        data = await self.connection.execute(PRIMARY_LOCATION)
        location_id = (data.get("location") or {}).get("id")
        if not location_id:
            return StageResult.failed(IntegrityError("location", "Primary location ID"))
        return StageResult.ok(location_id)

    async def apply(
        self,
        submission: ProductSubmission,
        variants: dict[str, RemoteVariant],
    ) -> StageResult[bool]:
        """Activate inventory for every variant that declares a quantity.

        Per-item field errors are logged and skipped; only the aggregate
        outcome is reported.

        Args:
            submission: Product submission.
            variants: Created variants keyed by SKU.

        Returns:
            StageResult with True when at least one adjustment was applied.
        """
        pending = [
            (variant, variants[variant.sku])
            for variant in submission.variants
            if variant.inventory_quantity is not None
            and variant.sku in variants
            and variants[variant.sku].inventory_item_id
        ]
        if not pending:
            return StageResult.ok(False)

        location = await self.primary_location_id()
        if not location.success:
            return StageResult.failed(location.error)
        location_id = location.unwrap()

        applied = 0
        for variant, remote in pending:
            data = await self.connection.execute(
                INVENTORY_ACTIVATE,
                {
                    "inventoryItemId": remote.inventory_item_id,
                    "locationId": location_id,
                    "available": variant.inventory_quantity,
                },
            )
            payload = data.get("inventoryActivate") or {}
            errors = user_errors(payload)
            if errors or not payload.get("inventoryLevel"):
                logger.warning(
                    "Inventory activation skipped",
                    shop=self.connection.shop_domain,
                    sku=variant.sku,
                    errors=errors,
                )
                continue
            applied += 1

        logger.info(
            "Activated inventory",
            shop=self.connection.shop_domain,
            location_id=location_id,
            requested=len(pending),
            applied=applied,
        )
        return StageResult.ok(applied > 0)
