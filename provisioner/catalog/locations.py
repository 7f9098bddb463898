"""Fulfillment location resolution.

Each shop gets one fulfillment location, created on first use and cached in
the ``shopify_locations`` table. Two concurrent first requests for the same
shop can both miss the cache and both create a remote location; the unique
constraint on the shop domain keeps the bookkeeping to one row, and the
request that loses the insert returns the winner's id. The extra remote
location is left in place.

A new row is committed as soon as it is written, so it survives a failure
in a later provisioning stage.
"""

from dataclasses import dataclass

import structlog
from sqlalchemy.exc import IntegrityError as DatabaseIntegrityError

from provisioner.catalog.connection import ShopConnection, user_errors
from provisioner.catalog.documents import LOCATION_ADD
from provisioner.domain.exceptions import IntegrityError, ValidationError
from provisioner.domain.results import StageResult
from provisioner.infrastructure.config import settings
from provisioner.infrastructure.location_repository import LocationRepository
from provisioner.infrastructure.models import LocationModel

logger = structlog.get_logger()


@dataclass(frozen=True)
class LocationProfile:
    """Address used when a shop's location has to be created."""

    name: str
    address1: str
    city: str
    province_code: str
    country_code: str
    zip: str

    @classmethod
    def from_settings(cls) -> "LocationProfile":
        """Build the default profile from configuration."""
        return cls(
            name=settings.default_location_name,
            address1=settings.default_location_address1,
            city=settings.default_location_city,
            province_code=settings.default_location_province_code,
            country_code=settings.default_location_country_code,
            zip=settings.default_location_zip,
        )

    def to_input(self) -> dict:
        """``LocationAddInput`` payload."""
        return {
            "name": self.name,
            "fulfillsOnlineOrders": True,
            "address": {
                "address1": self.address1,
                "city": self.city,
                "provinceCode": self.province_code,
                "countryCode": self.country_code,
                "zip": self.zip,
            },
        }


class LocationResolver:
    """Get-or-create of the fulfillment location for a shop."""

    def __init__(
        self,
        connection: ShopConnection,
        repository: LocationRepository,
        profile: LocationProfile | None = None,
    ) -> None:
        self.connection = connection
        self.repository = repository
        self.profile = profile or LocationProfile.from_settings()

    async def resolve(self) -> StageResult[str]:
        """Return the shop's location id, creating the location if needed.

        Returns:
            StageResult with the remote location gid.
        """
        shop = self.connection.shop_domain

        cached = await self.repository.get_by_shop_domain(shop)
        if cached is not None:
            logger.debug("Using cached location", shop=shop, location_id=cached.shopify_location_id)
            return StageResult.ok(cached.shopify_location_id)

        data = await self.connection.execute(LOCATION_ADD, {"input": self.profile.to_input()})
        payload = data.get("locationAdd") or {}

        errors = user_errors(payload)
        if errors:
            return StageResult.failed(ValidationError("locationAdd", errors))

        location_id = (payload.get("location") or {}).get("id")
        if not location_id:
            return StageResult.failed(IntegrityError("locationAdd", "Location ID"))

        logger.info("Created location", shop=shop, location_id=location_id)
        return StageResult.ok(await self._remember(shop, location_id))

    async def _remember(self, shop: str, location_id: str) -> str:
        """Persist the location id, deferring to a row inserted concurrently."""
        try:
            await self.repository.add(
                LocationModel(
                    shop_domain=shop,
                    shopify_location_id=location_id,
                    name=self.profile.name,
                    address1=self.profile.address1,
                    city=self.profile.city,
                    province_code=self.profile.province_code,
                    country_code=self.profile.country_code,
                    zip=self.profile.zip,
                )
            )
            await self.repository.commit()
        except DatabaseIntegrityError:
            await self.repository.rollback()
            existing = await self.repository.get_by_shop_domain(shop)
            if existing is None:
                raise
            logger.warning(
                "Location already recorded by a concurrent request",
                shop=shop,
                created_location_id=location_id,
                recorded_location_id=existing.shopify_location_id,
            )
            return existing.shopify_location_id
        return location_id
