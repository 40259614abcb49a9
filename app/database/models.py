"""SQLAlchemy models for the hotel tariff schema.

Two schemas live side by side:

* the normalized ``hotel_*`` tables (properties, vendors, room types, rate
  plans, seasons, tariffs and their JSON attributes), which are the canonical
  store, and
* the flat ``legacy_*`` tables kept as a compatibility mirror for older
  reporting queries.

Identifiers are integer identities. Dimension rows are resolved by natural key
at the application level; no unique constraints back those lookups.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    JSON,
    BigInteger,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    TIMESTAMP,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

# SQLite only auto-increments INTEGER primary keys
ID_TYPE = BigInteger().with_variant(Integer, "sqlite")
JSON_TYPE = JSON().with_variant(JSONB, "postgresql")


class Property(Base):
    """A hotel property, identified by name and city within a tenant."""

    __tablename__ = "hotel_properties"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    property_name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)  # star rating
    property_type: Mapped[str | None] = mapped_column(String(50), nullable=True)  # hotel, resort
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())

    room_types: Mapped[list["RoomType"]] = relationship("RoomType", back_populates="property")
    rate_plans: Mapped[list["RatePlan"]] = relationship("RatePlan", back_populates="property")
    seasons: Mapped[list["Season"]] = relationship("Season", back_populates="property")


class Vendor(Base):
    """A rate provider, identified by name within a tenant."""

    __tablename__ = "hotel_vendors"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    vendor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())


class RoomType(Base):
    """Room category offered by a property."""

    __tablename__ = "hotel_room_types"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("hotel_properties.id"), nullable=False, index=True
    )
    room_name: Mapped[str] = mapped_column(String(255), nullable=False)
    occupancy_standard: Mapped[int | None] = mapped_column(Integer, nullable=True)
    occupancy_max: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())

    property: Mapped["Property"] = relationship("Property", back_populates="room_types")


class RatePlan(Base):
    """Meal-plan based rate plan of a property."""

    __tablename__ = "hotel_rate_plans"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("hotel_properties.id"), nullable=False, index=True
    )
    plan_name: Mapped[str] = mapped_column(String(255), nullable=False)
    meal_plan: Mapped[str | None] = mapped_column(String(100), nullable=True)  # BB, HB, FB, AI
    cancellation_policy: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())

    property: Mapped["Property"] = relationship("Property", back_populates="rate_plans")


class Season(Base):
    """Validity window of a property's rates."""

    __tablename__ = "hotel_seasons"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("hotel_properties.id"), nullable=False, index=True
    )
    season_name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())

    property: Mapped["Property"] = relationship("Property", back_populates="seasons")


class Tariff(Base):
    """Priced combination of property, vendor, room type, rate plan and season."""

    __tablename__ = "hotel_tariffs"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("hotel_properties.id"), nullable=False)
    vendor_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("hotel_vendors.id"), nullable=False)
    room_type_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("hotel_room_types.id"), nullable=False)
    rate_plan_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("hotel_rate_plans.id"), nullable=False)
    season_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("hotel_seasons.id"), nullable=False)
    base_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    tax_percent: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    service_fee: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="INR")
    extra_adult_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())

    property: Mapped["Property"] = relationship("Property")
    vendor: Mapped["Vendor"] = relationship("Vendor")
    room_type: Mapped["RoomType"] = relationship("RoomType")
    rate_plan: Mapped["RatePlan"] = relationship("RatePlan")
    season: Mapped["Season"] = relationship("Season")
    attributes: Mapped["TariffAttributes | None"] = relationship(
        "TariffAttributes", back_populates="tariff", uselist=False
    )


class TariffAttributes(Base):
    """Free-form JSON attributes of a tariff, e.g. the source document id."""

    __tablename__ = "hotel_tariff_attributes"

    tariff_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("hotel_tariffs.id"), primary_key=True)
    attributes: Mapped[dict] = mapped_column(JSON_TYPE, nullable=False, default=dict)

    tariff: Mapped["Tariff"] = relationship("Tariff", back_populates="attributes")


class Document(Base):
    """Uploaded rate-sheet document and its processing state."""

    __tablename__ = "hotel_documents"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    blob_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    document_type: Mapped[str] = mapped_column(String(50), nullable=False, default="hotel-tariff")
    tenant_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    processing_status: Mapped[str] = mapped_column(
        String(50), nullable=False, default="pending"
    )  # pending | processing | completed | failed
    extracted_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    upload_date: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    processed_date: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)


class LegacyProduct(Base):
    """Flat-schema hotel product (compatibility mirror)."""

    __tablename__ = "legacy_products"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(String(50), nullable=False)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    product_type: Mapped[str] = mapped_column(String(50), nullable=False, default="Hotel")
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())


class LegacyVendor(Base):
    """Flat-schema vendor (compatibility mirror)."""

    __tablename__ = "legacy_vendors"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(String(50), nullable=False)
    vendor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())


class LegacyTariff(Base):
    """Flat-schema tariff keyed by tenant, product, vendor and season."""

    __tablename__ = "legacy_tariffs"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(String(50), nullable=False)
    product_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("legacy_products.id"), nullable=False)
    vendor_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("legacy_vendors.id"), nullable=False)
    base_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    gst_percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    service_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    meal_plan: Mapped[str] = mapped_column(String(100), nullable=False)
    season: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())


LEGACY_TABLES = [
    LegacyProduct.__table__,
    LegacyVendor.__table__,
    LegacyTariff.__table__,
]
