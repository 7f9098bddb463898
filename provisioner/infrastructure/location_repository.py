"""Location repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from provisioner.infrastructure.models import LocationModel


class LocationRepository:
    """Repository for the per-shop location cache.

    Example usage:
        async with async_session_factory() as session:
            repo = LocationRepository(session)
            location = await repo.get_by_shop_domain("example.myshopify.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def get_by_shop_domain(self, shop_domain: str) -> LocationModel | None:
        """Get the cached location for a shop.

        Args:
            shop_domain: Shop domain.

        Returns:
            LocationModel if one was recorded, None otherwise.
        """
        query = select(LocationModel).where(LocationModel.shop_domain == shop_domain)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def add(self, location: LocationModel) -> LocationModel:
        """Insert a location row.

        Flushes immediately so a unique-constraint conflict on the shop
        domain surfaces here rather than at commit time.

        Args:
            location: Location to insert.

        Returns:
            The inserted location.

        Raises:
            sqlalchemy.exc.IntegrityError: If the shop already has a row.
        """
        self.session.add(location)
        await self.session.flush()
        return location

    async def commit(self) -> None:
        """Commit so the row outlives a failure later in the request."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Discard pending changes after a failed insert."""
        await self.session.rollback()
