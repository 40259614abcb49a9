"""Ordered cascade of tariff extraction strategies."""

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from app.models.analysis import AnalyzeResult
from app.models.tariff import ExtractionMethod, ExtractionOutcome, HotelTariff
from app.services.extraction.llm_extractor import LLMTariffExtractor
from app.services.extraction.metrics import ExtractionMetrics
from app.services.extraction.regex_extractor import extract_with_regex, is_useful
from app.services.extraction.structured_extractor import extract_from_structured_model
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ExtractionStep:
    """One strategy of the cascade.

    Attributes:
        method: Method reported when this step wins
        applies: Whether the step can run on a result at all
        run: Produces a candidate tariff
        accept: Whether a candidate is good enough to stop the cascade
    """

    method: ExtractionMethod
    applies: Callable[[AnalyzeResult], bool]
    run: Callable[[AnalyzeResult], Awaitable[Optional[HotelTariff]]]
    accept: Callable[[HotelTariff], bool]


def _has_content(result: AnalyzeResult) -> bool:
    return bool(result.content)


def _has_hotel_name(tariff: HotelTariff) -> bool:
    return bool(tariff.hotel_name)


def _always(_: HotelTariff) -> bool:
    return True


class ExtractionOrchestrator:
    """Run extraction strategies in order until one yields a tariff.

    The order is structured model output, then label regexes, then the LLM.
    Each step runs at most once. A step that raises is logged and treated as
    having produced nothing. When no step succeeds the outcome is
    ``(None, none)``, which is an expected result rather than an error.

    Attributes:
        llm_extractor: LLM step; the step is skipped when None
        metrics: Optional tally updated with every outcome
    """

    def __init__(
        self,
        llm_extractor: Optional[LLMTariffExtractor] = None,
        metrics: Optional[ExtractionMetrics] = None,
    ):
        self.llm_extractor = llm_extractor
        self.metrics = metrics
        self.steps: List[ExtractionStep] = self._build_steps()

    def _build_steps(self) -> List[ExtractionStep]:
        steps = [
            ExtractionStep(
                method=ExtractionMethod.STRUCTURED_MODEL,
                applies=lambda result: result.has_hotel_tariff,
                run=self._run_structured,
                accept=_always,
            ),
            ExtractionStep(
                method=ExtractionMethod.REGEX,
                applies=_has_content,
                run=self._run_regex,
                accept=is_useful,
            ),
        ]
        if self.llm_extractor is not None:
            steps.append(
                ExtractionStep(
                    method=ExtractionMethod.LLM,
                    applies=_has_content,
                    run=self._run_llm,
                    accept=_has_hotel_name,
                )
            )
        return steps

    async def _run_structured(self, result: AnalyzeResult) -> Optional[HotelTariff]:
        return extract_from_structured_model(result)

    async def _run_regex(self, result: AnalyzeResult) -> Optional[HotelTariff]:
        return extract_with_regex(result.content)

    async def _run_llm(self, result: AnalyzeResult) -> Optional[HotelTariff]:
        return await self.llm_extractor.extract(result.content)

    async def extract(self, result: AnalyzeResult) -> ExtractionOutcome:
        """Extract one tariff from an analysis result.

        Args:
            result: Normalized analyzer output

        Returns:
            ExtractionOutcome: The winning tariff and method, or ``(None, none)``
        """
        outcome = ExtractionOutcome(tariff=None, method=ExtractionMethod.NONE)

        for step in self.steps:
            if not step.applies(result):
                continue

            try:
                candidate = await step.run(result)
            except Exception as e:
                LOGGER.error(
                    f"{step.method.value} extraction failed: {str(e)}",
                    exc_info=True,
                    extra={"method": step.method.value},
                )
                continue

            if candidate is not None and step.accept(candidate):
                outcome = ExtractionOutcome(tariff=candidate, method=step.method)
                break

            LOGGER.info(f"{step.method.value} extraction produced no usable tariff")

        if outcome.tariff is None:
            LOGGER.info("No data could be extracted from the document")
        else:
            LOGGER.info(
                f"Extracted tariff using {outcome.method.value}",
                extra={"method": outcome.method.value, "hotel_name": outcome.tariff.hotel_name},
            )

        if self.metrics is not None:
            self.metrics.record(outcome)
        return outcome
