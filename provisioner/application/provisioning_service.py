"""Product provisioning application service.

Drives the provisioning stages for one submission, strictly in order:

- ``bulk`` inventory strategy:
  product → location → option lookup → variants with inventory → media → links
- ``activate`` inventory strategy:
  product → option lookup → variants → inventory activation → media → links

Each stage's ``StageResult`` is unwrapped before the next stage starts, so
the first failure aborts the run. Nothing is retried. What happens to a
product created before a later stage failed depends on the failure policy:
``leave`` keeps it for manual cleanup, ``delete`` removes it.
"""

from typing import Any, Literal

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from provisioner.catalog.connection import GraphQLExecutor, ShopConnection
from provisioner.catalog.inventory import InventorySetter
from provisioner.catalog.locations import LocationResolver
from provisioner.catalog.media import MediaAttacher, VariantMediaLinker
from provisioner.catalog.options import OptionIndex
from provisioner.catalog.products import ProductCreator, ProductLister, ProductRemover
from provisioner.catalog.variants import VariantProvisioner
from provisioner.domain.remote import ProvisioningResult, RemoteProduct
from provisioner.domain.submission import ProductSubmission
from provisioner.infrastructure.config import settings
from provisioner.infrastructure.location_repository import LocationRepository
from provisioner.infrastructure.shopify_client import (
    get_shopify_client,
    normalize_shop_domain,
)

logger = structlog.get_logger()

InventoryStrategy = Literal["bulk", "activate"]
FailurePolicy = Literal["leave", "delete"]


class ProvisioningService:
    """Provisions products into a Shopify shop."""

    def __init__(
        self,
        client: GraphQLExecutor,
        session: AsyncSession | None = None,
        inventory_strategy: InventoryStrategy | None = None,
        failure_policy: FailurePolicy | None = None,
        request_id: str | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: GraphQL client used for every remote call.
            session: Database session backing the location cache. Required
                for the ``bulk`` inventory strategy.
            inventory_strategy: Overrides the configured strategy.
            failure_policy: Overrides the configured failure policy.
            request_id: Request ID for log correlation.
        """
        self.client = client
        self.session = session
        self.inventory_strategy = inventory_strategy or settings.inventory_strategy
        self.failure_policy = failure_policy or settings.failure_policy
        self.request_id = request_id

    def _connect(self, shop_domain: str, access_token: str) -> ShopConnection:
        return ShopConnection(
            client=self.client,
            shop_domain=normalize_shop_domain(shop_domain),
            access_token=access_token,
        )

    async def provision(
        self,
        shop_domain: str,
        access_token: str,
        submission: ProductSubmission,
    ) -> ProvisioningResult:
        """Create a fully populated product.

        Args:
            shop_domain: Target shop.
            access_token: Admin API access token for the shop.
            submission: Validated product submission.

        Returns:
            ProvisioningResult describing everything created.

        Raises:
            ProvisioningError: The first stage failure.
        """
        connection = self._connect(shop_domain, access_token)
        log = logger.bind(
            shop=connection.shop_domain,
            request_id=self.request_id,
            strategy=self.inventory_strategy,
        )
        log.info(
            "Provisioning product",
            title=submission.title,
            variant_count=len(submission.variants),
        )

        product = (await ProductCreator(connection).create(submission)).unwrap()

        try:
            result = await self._populate(connection, product, submission)
        except Exception as exc:
            log.warning(
                "Provisioning failed after product creation",
                product_id=product.id,
                error=str(exc),
                failure_policy=self.failure_policy,
            )
            if self.failure_policy == "delete":
                await self._discard(connection, product)
            raise

        log.info(
            "Provisioned product",
            product_id=result.product_id,
            variants=len(result.variants),
            media=len(result.media),
            links=len(result.links),
        )
        return result

    async def _populate(
        self,
        connection: ShopConnection,
        product: RemoteProduct,
        submission: ProductSubmission,
    ) -> ProvisioningResult:
        """Run every stage after product creation."""
        result = ProvisioningResult(product=product)

        if self.inventory_strategy == "bulk":
            if self.session is None:
                raise RuntimeError("bulk inventory strategy requires a database session")
            resolver = LocationResolver(connection, LocationRepository(self.session))
            result.location_id = (await resolver.resolve()).unwrap()

        index = OptionIndex.build(submission, product)

        result.variants = (
            await VariantProvisioner(connection).provision(
                product.id, submission, index, location_id=result.location_id
            )
        ).unwrap()

        if self.inventory_strategy == "bulk":
            result.inventory_set = result.location_id is not None and any(
                v.inventory_quantity is not None for v in submission.variants
            )
        else:
            result.inventory_set = (
                await InventorySetter(connection).apply(submission, result.variants)
            ).unwrap()

        result.media = (
            await MediaAttacher(connection).attach(product.id, submission.media_images())
        ).unwrap()

        result.links = (
            await VariantMediaLinker(connection).link(
                product.id, submission, result.variants, result.media
            )
        ).unwrap()

        return result

    async def _discard(self, connection: ShopConnection, product: RemoteProduct) -> None:
        """Delete a partially provisioned product without masking the original error."""
        try:
            outcome = await ProductRemover(connection).delete(product.id)
        except Exception as exc:
            logger.error(
                "Could not delete partially provisioned product",
                shop=connection.shop_domain,
                product_id=product.id,
                error=str(exc),
            )
            return

        if outcome.success:
            logger.info(
                "Deleted partially provisioned product",
                shop=connection.shop_domain,
                product_id=product.id,
            )
        else:
            logger.error(
                "Shopify refused to delete partially provisioned product",
                shop=connection.shop_domain,
                product_id=product.id,
                error=outcome.error.message if outcome.error else None,
            )

    async def list_products(
        self,
        shop_domain: str,
        access_token: str,
        limit: int = 50,
    ) -> list[dict[str, Any]]:
        """List a shop's products.

        Args:
            shop_domain: Target shop.
            access_token: Admin API access token for the shop.
            limit: Maximum number of products.

        Returns:
            Product nodes, newest first.
        """
        connection = self._connect(shop_domain, access_token)
        return (await ProductLister(connection).list_products(limit)).unwrap()


def get_provisioning_service(
    session: AsyncSession | None = None,
    request_id: str | None = None,
) -> ProvisioningService:
    """Get provisioning service instance.

    Args:
        session: Database session for the location cache.
        request_id: Request ID for correlation.

    Returns:
        ProvisioningService instance.
    """
    return ProvisioningService(
        client=get_shopify_client(),
        session=session,
        request_id=request_id,
    )
