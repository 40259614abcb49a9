"""Create hotel tariff tables.

Revision ID: 5a1f0c2d9e77
Revises:
Create Date: 2026-10-18

Creates the normalized hotel_* schema (properties, vendors, room types, rate
plans, seasons, tariffs, tariff attributes, documents) and the flat legacy_*
mirror.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '5a1f0c2d9e77'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Create hotel and legacy tariff tables."""
    op.create_table(
        'hotel_properties',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('tenant_id', sa.String(50), nullable=False),
        sa.Column('property_name', sa.String(255), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('category', sa.String(50), nullable=True, comment='Star rating'),
        sa.Column('property_type', sa.String(50), nullable=True, comment='hotel, resort'),
        *_timestamps(),
    )
    op.create_index('ix_hotel_properties_tenant_id', 'hotel_properties', ['tenant_id'])

    op.create_table(
        'hotel_vendors',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('tenant_id', sa.String(50), nullable=False),
        sa.Column('vendor_name', sa.String(255), nullable=False),
        sa.Column('contact_email', sa.String(255), nullable=True),
        sa.Column('contact_phone', sa.String(50), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_hotel_vendors_tenant_id', 'hotel_vendors', ['tenant_id'])

    op.create_table(
        'hotel_room_types',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('property_id', sa.BigInteger(), sa.ForeignKey('hotel_properties.id'), nullable=False),
        sa.Column('room_name', sa.String(255), nullable=False),
        sa.Column('occupancy_standard', sa.Integer(), nullable=True),
        sa.Column('occupancy_max', sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_hotel_room_types_property_id', 'hotel_room_types', ['property_id'])

    op.create_table(
        'hotel_rate_plans',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('property_id', sa.BigInteger(), sa.ForeignKey('hotel_properties.id'), nullable=False),
        sa.Column('plan_name', sa.String(255), nullable=False),
        sa.Column('meal_plan', sa.String(100), nullable=True, comment='BB, HB, FB, AI'),
        sa.Column('cancellation_policy', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_hotel_rate_plans_property_id', 'hotel_rate_plans', ['property_id'])

    op.create_table(
        'hotel_seasons',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('property_id', sa.BigInteger(), sa.ForeignKey('hotel_properties.id'), nullable=False),
        sa.Column('season_name', sa.String(100), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_hotel_seasons_property_id', 'hotel_seasons', ['property_id'])

    op.create_table(
        'hotel_tariffs',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('property_id', sa.BigInteger(), sa.ForeignKey('hotel_properties.id'), nullable=False),
        sa.Column('vendor_id', sa.BigInteger(), sa.ForeignKey('hotel_vendors.id'), nullable=False),
        sa.Column('room_type_id', sa.BigInteger(), sa.ForeignKey('hotel_room_types.id'), nullable=False),
        sa.Column('rate_plan_id', sa.BigInteger(), sa.ForeignKey('hotel_rate_plans.id'), nullable=False),
        sa.Column('season_id', sa.BigInteger(), sa.ForeignKey('hotel_seasons.id'), nullable=False),
        sa.Column('base_rate', sa.Numeric(10, 2), nullable=False),
        sa.Column('tax_percent', sa.Numeric(5, 2), nullable=True),
        sa.Column('service_fee', sa.Numeric(10, 2), nullable=True),
        sa.Column('currency', sa.String(3), nullable=False, server_default='INR'),
        sa.Column('extra_adult_rate', sa.Numeric(10, 2), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'hotel_tariff_attributes',
        sa.Column('tariff_id', sa.BigInteger(), sa.ForeignKey('hotel_tariffs.id'), primary_key=True),
        sa.Column('attributes', postgresql.JSONB(), nullable=False, server_default='{}'),
    )

    op.create_table(
        'hotel_documents',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('blob_url', sa.String(1024), nullable=False),
        sa.Column('document_type', sa.String(50), nullable=False, server_default='hotel-tariff'),
        sa.Column('tenant_id', sa.String(50), nullable=False),
        sa.Column('processing_status', sa.String(50), nullable=False, server_default='pending',
                  comment='pending, processing, completed, failed'),
        sa.Column('extracted_text', sa.Text(), nullable=True),
        sa.Column('upload_date', sa.TIMESTAMP(timezone=True), server_default=sa.func.now()),
        sa.Column('processed_date', sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index('ix_hotel_documents_tenant_id', 'hotel_documents', ['tenant_id'])

    # Legacy flat mirror
    op.create_table(
        'legacy_products',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('tenant_id', sa.String(50), nullable=False),
        sa.Column('product_name', sa.String(255), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('product_type', sa.String(50), nullable=False, server_default='Hotel'),
        *_timestamps(),
    )

    op.create_table(
        'legacy_vendors',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('tenant_id', sa.String(50), nullable=False),
        sa.Column('vendor_name', sa.String(255), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'legacy_tariffs',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('tenant_id', sa.String(50), nullable=False),
        sa.Column('product_id', sa.BigInteger(), sa.ForeignKey('legacy_products.id'), nullable=False),
        sa.Column('vendor_id', sa.BigInteger(), sa.ForeignKey('legacy_vendors.id'), nullable=False),
        sa.Column('base_rate', sa.Numeric(10, 2), nullable=False),
        sa.Column('gst_percent', sa.Numeric(5, 2), nullable=False),
        sa.Column('service_fee', sa.Numeric(10, 2), nullable=False),
        sa.Column('meal_plan', sa.String(100), nullable=False),
        sa.Column('season', sa.String(50), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    """Drop hotel and legacy tariff tables."""
    op.drop_table('legacy_tariffs')
    op.drop_table('legacy_vendors')
    op.drop_table('legacy_products')
    op.drop_index('ix_hotel_documents_tenant_id', table_name='hotel_documents')
    op.drop_table('hotel_documents')
    op.drop_table('hotel_tariff_attributes')
    op.drop_table('hotel_tariffs')
    op.drop_index('ix_hotel_seasons_property_id', table_name='hotel_seasons')
    op.drop_table('hotel_seasons')
    op.drop_index('ix_hotel_rate_plans_property_id', table_name='hotel_rate_plans')
    op.drop_table('hotel_rate_plans')
    op.drop_index('ix_hotel_room_types_property_id', table_name='hotel_room_types')
    op.drop_table('hotel_room_types')
    op.drop_index('ix_hotel_vendors_tenant_id', table_name='hotel_vendors')
    op.drop_table('hotel_vendors')
    op.drop_index('ix_hotel_properties_tenant_id', table_name='hotel_properties')
    op.drop_table('hotel_properties')
