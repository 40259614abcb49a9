"""Tests for LLM-based tariff extraction."""

import json
from datetime import date
from unittest.mock import AsyncMock, Mock

import pytest

from app.core.exceptions import APIClientError
from app.services.extraction.llm_extractor import LLMTariffExtractor


class TestLLMTariffExtractor:
    """Test suite for LLMTariffExtractor."""

    @pytest.fixture
    def mock_client(self):
        """Create mock Azure OpenAI client."""
        client = Mock()
        client.generate_content = AsyncMock()
        return client

    @pytest.mark.asyncio
    async def test_extract_normalizes_reply(self, mock_client):
        mock_client.generate_content.return_value = json.dumps(
            {
                "hotelName": "Hill Top Inn",
                "city": "Shimla",
                "category": "3-star",
                "vendor": "North Trails",
                "baseRate": "Rs. 3,200",
                "gstPercent": 12,
                "serviceFee": "250",
                "mealPlan": {"Breakfast": True, "Lunch": False, "Dinner": True},
                "season": "Summer",
                "startDate": "2024-04-01",
                "endDate": "2024-06-30",
            }
        )
        extractor = LLMTariffExtractor(mock_client)

        tariff = await extractor.extract("Hill Top Inn, Shimla ...")

        assert tariff.hotel_name == "Hill Top Inn"
        assert tariff.base_rate == 3200
        assert tariff.gst_percent == 12
        assert tariff.service_fee == 250
        assert tariff.meal_plan == "Breakfast, Dinner"
        assert tariff.start_date == "2024-04-01"
        assert tariff.end_date == "2024-06-30"

    @pytest.mark.asyncio
    async def test_extract_accepts_fenced_json(self, mock_client):
        mock_client.generate_content.return_value = '```json\n{"hotelName": "Palm Court"}\n```'

        tariff = await LLMTariffExtractor(mock_client).extract("Palm Court")

        assert tariff.hotel_name == "Palm Court"

    @pytest.mark.asyncio
    async def test_invalid_dates_fall_back(self, mock_client):
        mock_client.generate_content.return_value = json.dumps(
            {"hotelName": "Palm Court", "startDate": "01/04/2024", "endDate": ""}
        )

        tariff = await LLMTariffExtractor(mock_client).extract("Palm Court")

        assert tariff.start_date == date.today().isoformat()
        assert tariff.end_date > tariff.start_date

    @pytest.mark.asyncio
    async def test_non_json_reply_returns_none(self, mock_client):
        mock_client.generate_content.return_value = "Sorry, I cannot help with that."

        assert await LLMTariffExtractor(mock_client).extract("text") is None

    @pytest.mark.asyncio
    async def test_client_error_returns_none(self, mock_client):
        mock_client.generate_content.side_effect = APIClientError("rate limited")

        assert await LLMTariffExtractor(mock_client).extract("text") is None

    @pytest.mark.asyncio
    async def test_prompt_is_truncated(self, mock_client):
        mock_client.generate_content.return_value = "{}"
        extractor = LLMTariffExtractor(mock_client, max_chars=4000)

        await extractor.extract("a" * 4500 + "TAIL")

        prompt = mock_client.generate_content.call_args.kwargs["contents"]
        assert "a" * 4000 in prompt
        assert "a" * 4001 not in prompt
        assert "TAIL" not in prompt
        assert mock_client.generate_content.call_args.kwargs["temperature"] == 0.0

    def test_normalize_flattens_nested_values(self):
        tariff = LLMTariffExtractor.normalize(
            {"hotelName": {"name": "x"}, "mealPlan": ["Breakfast", "Lunch"], "baseRate": None}
        )

        assert tariff.hotel_name == ""
        assert tariff.meal_plan == "Breakfast, Lunch"
        assert tariff.base_rate == 0
