"""Database module for SQLAlchemy models and session management."""

from app.core.database import (
    Base,
    DatabaseClient,
    async_session_maker,
    close_database,
    db_client,
    engine,
    get_async_session,
    init_database,
)
from app.database.models import (
    Document,
    LegacyProduct,
    LegacyTariff,
    LegacyVendor,
    Property,
    RatePlan,
    RoomType,
    Season,
    Tariff,
    TariffAttributes,
    Vendor,
)

__all__ = [
    "Base",
    "engine",
    "async_session_maker",
    "get_async_session",
    "DatabaseClient",
    "db_client",
    "init_database",
    "close_database",
    "Property",
    "Vendor",
    "RoomType",
    "RatePlan",
    "Season",
    "Tariff",
    "TariffAttributes",
    "Document",
    "LegacyProduct",
    "LegacyVendor",
    "LegacyTariff",
]
