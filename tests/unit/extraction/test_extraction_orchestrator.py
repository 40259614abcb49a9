"""Tests for the extraction cascade and its metrics."""

from unittest.mock import AsyncMock, Mock

import pytest

from app.models.analysis import AnalyzedDocument, AnalyzeResult
from app.models.tariff import ExtractionMethod, HotelTariff
from app.services.analysis.document_analyzer import mock_analyze_result
from app.services.extraction.metrics import ExtractionMetrics
from app.services.extraction.orchestrator import ExtractionOrchestrator


def _llm_tariff(name: str) -> HotelTariff:
    return HotelTariff(
        hotel_name=name,
        vendor="",
        city="Goa",
        category="",
        base_rate=6000.0,
        gst_percent=12.0,
        service_fee=0.0,
        meal_plan="",
        season="",
        start_date="2024-01-01",
        end_date="2024-01-31",
    )


class TestExtractionOrchestrator:
    """Test suite for ExtractionOrchestrator."""

    @pytest.fixture
    def metrics(self):
        return ExtractionMetrics()

    @pytest.fixture
    def llm_extractor(self):
        extractor = Mock()
        extractor.extract = AsyncMock(return_value=None)
        return extractor

    @pytest.mark.asyncio
    async def test_structured_model_wins_first(self, metrics, llm_extractor, sample_tariff):
        orchestrator = ExtractionOrchestrator(llm_extractor=llm_extractor, metrics=metrics)

        outcome = await orchestrator.extract(mock_analyze_result())

        assert outcome.method == ExtractionMethod.STRUCTURED_MODEL
        assert outcome.tariff == sample_tariff
        llm_extractor.extract.assert_not_called()
        assert metrics.count(ExtractionMethod.STRUCTURED_MODEL) == 1

    @pytest.mark.asyncio
    async def test_regex_used_when_no_structured_document(self, metrics, llm_extractor):
        result = AnalyzeResult(content="Hotel: Grand Plaza, City: Pune, Rate: Rs. 5,000")
        orchestrator = ExtractionOrchestrator(llm_extractor=llm_extractor, metrics=metrics)

        outcome = await orchestrator.extract(result)

        assert outcome.method == ExtractionMethod.REGEX
        assert outcome.tariff.hotel_name == "Grand Plaza"
        llm_extractor.extract.assert_not_called()

    @pytest.mark.asyncio
    async def test_llm_used_when_regex_not_useful(self, metrics, llm_extractor):
        llm_extractor.extract.return_value = _llm_tariff("Beach House")
        result = AnalyzeResult(
            content="Beach House in Goa, six thousand per night",
            documents=[AnalyzedDocument(doc_type="Other", fields={})],
        )
        orchestrator = ExtractionOrchestrator(llm_extractor=llm_extractor, metrics=metrics)

        outcome = await orchestrator.extract(result)

        assert outcome.method == ExtractionMethod.LLM
        assert outcome.tariff.hotel_name == "Beach House"
        llm_extractor.extract.assert_awaited_once_with(result.content)

    @pytest.mark.asyncio
    async def test_llm_result_without_name_is_rejected(self, metrics, llm_extractor):
        llm_extractor.extract.return_value = _llm_tariff("")
        orchestrator = ExtractionOrchestrator(llm_extractor=llm_extractor, metrics=metrics)

        outcome = await orchestrator.extract(AnalyzeResult(content="nothing useful here"))

        assert outcome.method == ExtractionMethod.NONE
        assert outcome.tariff is None
        assert not outcome.succeeded

    @pytest.mark.asyncio
    async def test_failing_step_is_skipped(self, metrics, llm_extractor):
        llm_extractor.extract.side_effect = RuntimeError("boom")
        orchestrator = ExtractionOrchestrator(llm_extractor=llm_extractor, metrics=metrics)

        outcome = await orchestrator.extract(AnalyzeResult(content="nothing useful here"))

        assert outcome.method == ExtractionMethod.NONE
        assert metrics.snapshot()["failedExtractions"] == 1

    @pytest.mark.asyncio
    async def test_empty_content_skips_text_steps(self, llm_extractor):
        orchestrator = ExtractionOrchestrator(llm_extractor=llm_extractor)

        outcome = await orchestrator.extract(AnalyzeResult(content=""))

        assert outcome.method == ExtractionMethod.NONE
        llm_extractor.extract.assert_not_called()

    def test_llm_step_omitted_without_extractor(self):
        orchestrator = ExtractionOrchestrator()

        assert [step.method for step in orchestrator.steps] == [
            ExtractionMethod.STRUCTURED_MODEL,
            ExtractionMethod.REGEX,
        ]


class TestExtractionMetrics:
    """Test suite for ExtractionMetrics."""

    @pytest.mark.asyncio
    async def test_snapshot_counts_every_outcome(self):
        metrics = ExtractionMetrics()
        orchestrator = ExtractionOrchestrator(metrics=metrics)

        await orchestrator.extract(mock_analyze_result())
        await orchestrator.extract(AnalyzeResult(content="Hotel: Grand Plaza, City: Pune"))
        await orchestrator.extract(AnalyzeResult(content="blank"))

        snapshot = metrics.snapshot()
        assert snapshot["totalDocuments"] == 3
        assert snapshot["successfulExtractions"] == 2
        assert snapshot["failedExtractions"] == 1
        assert snapshot["extractionMethods"] == {
            "structured_model": 1,
            "regex": 1,
            "llm": 0,
            "none": 1,
        }
        assert snapshot["successRate"] == "66.67%"

    def test_empty_metrics(self):
        metrics = ExtractionMetrics()

        assert metrics.success_rate() == "0.00%"
        assert metrics.total == 0
