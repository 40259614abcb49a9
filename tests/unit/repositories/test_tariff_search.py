"""Tests for tariff detail and hotel search queries."""

from dataclasses import replace

import pytest

from app.services.tariff.query_service import TariffQueryService
from app.services.tariff.reconciler import TariffReconciler

TENANT = "demo-tenant"


class TestTariffQueryService:
    """Test suite for TariffQueryService."""

    @pytest.fixture
    def hotels(self, sample_tariff):
        return [
            replace(sample_tariff, hotel_name="Budget Inn", category="3-star", base_rate=3000.0,
                    gst_percent=12.0, service_fee=2000.0),
            replace(sample_tariff, hotel_name="Sea View", category="5-star", base_rate=4000.0,
                    gst_percent=18.0, service_fee=0.0),
            replace(sample_tariff, hotel_name="Hill Crest", city="Pune", base_rate=2500.0),
        ]

    @pytest.mark.asyncio
    async def test_search_filters_by_city_and_sorts_by_base_rate(self, db_session, hotels):
        reconciler = TariffReconciler(db_session, TENANT)
        for tariff in hotels:
            await reconciler.save(tariff)

        results = await TariffQueryService(db_session, tenant_id=TENANT).search_hotels(city="Mumbai")

        assert [item.hotel_name for item in results] == ["Budget Inn", "Sea View"]
        assert results[0].total_rate == 5360
        assert results[1].total_rate == 4720

    @pytest.mark.asyncio
    async def test_search_sorts_by_total_rate(self, db_session, hotels):
        reconciler = TariffReconciler(db_session, TENANT)
        for tariff in hotels:
            await reconciler.save(tariff)

        results = await TariffQueryService(db_session, tenant_id=TENANT).search_hotels(
            city="Mumbai", sort_by="totalRate", sort_order="desc"
        )

        assert [item.hotel_name for item in results] == ["Budget Inn", "Sea View"]

        ascending = await TariffQueryService(db_session, tenant_id=TENANT).search_hotels(
            city="Mumbai", sort_by="totalRate"
        )
        assert [item.hotel_name for item in ascending] == ["Sea View", "Budget Inn"]

    @pytest.mark.asyncio
    async def test_search_filters_by_category_and_limit(self, db_session, hotels):
        reconciler = TariffReconciler(db_session, TENANT)
        for tariff in hotels:
            await reconciler.save(tariff)
        service = TariffQueryService(db_session, tenant_id=TENANT)

        five_star = await service.search_hotels(category="5-star")
        limited = await service.search_hotels(limit=1)
        other_tenant = await TariffQueryService(db_session, tenant_id="other").search_hotels()

        assert {item.hotel_name for item in five_star} == {"Sea View", "Hill Crest"}
        assert [item.hotel_name for item in limited] == ["Hill Crest"]
        assert other_tenant == []

    @pytest.mark.asyncio
    async def test_tariff_detail_round_trip(self, db_session, sample_tariff):
        saved = await TariffReconciler(db_session, TENANT).save(sample_tariff, document_id=3)

        detail = await TariffQueryService(db_session).get_tariff_detail(saved.tariff_id)

        assert detail.id == saved.tariff_id
        assert detail.property.name == sample_tariff.hotel_name
        assert detail.property.city == sample_tariff.city
        assert detail.vendor.name == sample_tariff.vendor
        assert detail.season.start_date == sample_tariff.start_date
        assert detail.season.end_date == sample_tariff.end_date
        assert detail.rate_plan.meal_plan == sample_tariff.meal_plan
        assert detail.base_rate == sample_tariff.base_rate
        assert detail.tax_percent == sample_tariff.gst_percent
        assert detail.service_fee == sample_tariff.service_fee
        assert detail.attributes == {"documentId": 3}

    @pytest.mark.asyncio
    async def test_missing_tariff_detail(self, db_session):
        assert await TariffQueryService(db_session).get_tariff_detail(999) is None
