"""Tariff persistence and queries."""

from app.services.tariff.legacy_writer import LegacyTariffWriter, is_schema_error
from app.services.tariff.query_service import TariffQueryService, total_rate
from app.services.tariff.reconciler import PersistenceResult, TariffReconciler

__all__ = [
    "LegacyTariffWriter",
    "PersistenceResult",
    "TariffQueryService",
    "TariffReconciler",
    "is_schema_error",
    "total_rate",
]
