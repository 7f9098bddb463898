"""Create shopify_locations table.

Revision ID: 001
Revises:
Create Date: 2025-11-14

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the per-shop location cache."""
    op.create_table(
        'shopify_locations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('shop_domain', sa.String(255), nullable=False),
        sa.Column('shopify_location_id', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address1', sa.String(255), nullable=True),
        sa.Column('city', sa.String(255), nullable=True),
        sa.Column('province_code', sa.String(10), nullable=True),
        sa.Column('country_code', sa.String(5), nullable=True),
        sa.Column('zip', sa.String(20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        # One location per shop
        sa.UniqueConstraint('shop_domain', name='uq_shopify_locations_shop_domain'),
    )


def downgrade() -> None:
    """Drop the per-shop location cache."""
    op.drop_table('shopify_locations')
