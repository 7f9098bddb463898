"""Shared fixtures for provisioner tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from provisioner.catalog.connection import ShopConnection
from provisioner.domain.submission import Image, Option, ProductSubmission, Variant
from provisioner.infrastructure import models  # noqa: F401
from provisioner.infrastructure.database import Base
from shopify_fakes import SHOP, TOKEN, FakeShopify


@pytest.fixture
def fake_shopify() -> FakeShopify:
    """Fake client with an empty response table."""
    return FakeShopify()


@pytest.fixture
def connection(fake_shopify: FakeShopify) -> ShopConnection:
    """Connection bound to the test shop."""
    return ShopConnection(client=fake_shopify, shop_domain=SHOP, access_token=TOKEN)


@pytest.fixture
def tshirt_submission() -> ProductSubmission:
    """Two options (2 + 2 values), four variants, one variant image."""
    return ProductSubmission(
        title="Special T-Shirt Premium",
        description="<p>High quality premium cotton t-shirt</p>",
        vendor="My Brand",
        product_type="Apparel",
        options=(
            Option(name="Size", values=("S", "M")),
            Option(name="Color", values=("Red", "Blue")),
        ),
        variants=(
            Variant(
                sku="TSHIRT-S-RED",
                price="19.99",
                option_values=("S", "Red"),
                inventory_quantity=100,
                image=Image(src="https://cdn.example.com/red.png", alt="Red"),
            ),
            Variant(sku="TSHIRT-S-BLUE", price="19.99", option_values=("S", "Blue"), inventory_quantity=50),
            Variant(sku="TSHIRT-M-RED", price="21.99", option_values=("M", "Red"), inventory_quantity=75),
            Variant(sku="TSHIRT-M-BLUE", price="21.99", option_values=("M", "Blue"), inventory_quantity=60),
        ),
    )


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Session on a fresh in-memory SQLite database."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()
