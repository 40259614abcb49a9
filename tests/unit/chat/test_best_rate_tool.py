"""Tests for the best-rate chat tool."""

import json
from dataclasses import replace
from unittest.mock import AsyncMock

import pytest

from app.services.chat.tools import BEST_RATE_TOOL_NAME, BestRateTool, count_nights
from app.services.tariff.reconciler import TariffReconciler

TENANT = "demo-tenant"


class TestBestRateTool:
    """Test suite for BestRateTool."""

    @pytest.fixture
    def goa_tariff(self, sample_tariff):
        return replace(
            sample_tariff,
            hotel_name="Goa Sands",
            vendor="Coastal Holidays",
            city="Goa",
            category="4-star",
            base_rate=10000.0,
            gst_percent=18.0,
            service_fee=1000.0,
            meal_plan="Breakfast",
            season="Winter",
        )

    @pytest.mark.asyncio
    async def test_prices_stay_at_cheapest_hotel(self, db_session, goa_tariff):
        reconciler = TariffReconciler(db_session, TENANT)
        await reconciler.save(goa_tariff)
        await reconciler.save(replace(goa_tariff, hotel_name="Goa Palace", base_rate=15000.0))

        result = await BestRateTool(db_session).run(
            city="goa", category="4-star", start="2024-12-20", end="2024-12-22", pax=2
        )

        assert result["found"] is True
        hotel = result["hotel"]
        assert hotel["name"] == "Goa Sands"
        assert hotel["vendor"] == "Coastal Holidays"
        assert hotel["nights"] == 2
        assert hotel["baseTotal"] == 20000
        assert hotel["gst"] == {"percent": 18, "amount": 3600}
        assert hotel["serviceFee"] == 1000
        assert hotel["totalPrice"] == 24600
        assert hotel["perPerson"] == 12300

    @pytest.mark.asyncio
    async def test_not_found(self, db_session, goa_tariff):
        await TariffReconciler(db_session, TENANT).save(goa_tariff)

        result = await BestRateTool(db_session).run(
            city="Jaipur", category="5-star", start="2024-12-20", end="2024-12-22"
        )

        assert result["found"] is False
        assert "No matching hotel rates" in result["message"]

    @pytest.mark.asyncio
    async def test_invalid_dates_return_error_payload(self, db_session):
        result = await BestRateTool(db_session).run(
            city="Goa", category="4-star", start="next friday", end="2024-12-22"
        )

        assert result["found"] is False
        assert result["error"].startswith("Invalid arguments")

    @pytest.mark.asyncio
    async def test_database_failure_returns_error_payload(self, db_session):
        tool = BestRateTool(db_session)
        tool.repository.find_cheapest_by_city = AsyncMock(side_effect=RuntimeError("connection lost"))

        result = await tool.run(city="Goa", category="4-star", start="2024-12-20", end="2024-12-22")

        assert result["found"] is False
        assert "connection lost" in result["error"]
        assert "technical issue" in result["message"]

    @pytest.mark.asyncio
    async def test_invoke_parses_json_arguments(self, db_session, goa_tariff):
        await TariffReconciler(db_session, TENANT).save(goa_tariff)
        arguments = json.dumps(
            {"city": "Goa", "category": "4-star", "start": "2024-12-20", "end": "2024-12-21"}
        )

        result = await BestRateTool(db_session).invoke(arguments)

        assert result["found"] is True
        assert result["hotel"]["nights"] == 1
        assert result["hotel"]["perPerson"] == result["hotel"]["totalPrice"]

    @pytest.mark.asyncio
    async def test_invoke_with_missing_argument(self, db_session):
        result = await BestRateTool(db_session).invoke(json.dumps({"city": "Goa"}))

        assert result["found"] is False
        assert result["error"].startswith("Function call error")

    @pytest.mark.asyncio
    async def test_infinite_pax_returns_error_payload(self, db_session):
        result = await BestRateTool(db_session).run(
            city="Goa", category="4-star", start="2024-12-20", end="2024-12-22", pax=float("inf")
        )

        assert result["found"] is False
        assert result["error"].startswith("Invalid arguments")

    @pytest.mark.asyncio
    async def test_invoke_with_overflowing_pax(self, db_session):
        arguments = '{"city": "Goa", "category": "4-star", "start": "2024-12-20", "end": "2024-12-22", "pax": 1e400}'

        result = await BestRateTool(db_session).invoke(arguments)

        assert result["found"] is False
        assert "error" in result

    def test_schema_names_tool(self):
        assert BestRateTool.schema["function"]["name"] == BEST_RATE_TOOL_NAME
        assert BestRateTool.schema["function"]["parameters"]["required"] == [
            "city",
            "category",
            "start",
            "end",
        ]


def test_count_nights_never_negative():
    assert count_nights("2024-12-20", "2024-12-23") == 3
    assert count_nights("2024-12-23", "2024-12-20") == 0
