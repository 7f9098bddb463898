"""SQLAlchemy models for database tables."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from provisioner.infrastructure.database import Base


class LocationModel(Base):
    """Fulfillment location cached per shop.

    One row per shop domain. The row is written the first time a product is
    provisioned for the shop and reused for every later request.

    Attributes:
        id: Surrogate key.
        shop_domain: Shop domain, e.g. "example.myshopify.com" (unique).
        shopify_location_id: Remote location gid.
        name: Location display name.
        address1: Street address.
        city: City.
        province_code: Province/state code.
        country_code: ISO country code.
        zip: Postal code.
    """

    __tablename__ = "shopify_locations"
    __table_args__ = (
        UniqueConstraint("shop_domain", name="uq_shopify_locations_shop_domain"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    shop_domain: Mapped[str] = mapped_column(String(255), nullable=False)
    shopify_location_id: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    province_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    country_code: Mapped[str | None] = mapped_column(String(5), nullable=True)
    zip: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
