"""Counters of extraction outcomes per method."""

from collections import Counter
from typing import Any, Dict

from app.models.tariff import ExtractionMethod, ExtractionOutcome


class ExtractionMetrics:
    """Tally of which extraction method handled each document.

    One instance is shared by the application and injected where outcomes are
    produced. Every outcome counts, including ``none``, so the success rate is
    successes over all processed documents.
    """

    def __init__(self):
        self._counts: Counter = Counter()

    def record(self, outcome: ExtractionOutcome) -> None:
        self._counts[outcome.method] += 1

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    @property
    def successful(self) -> int:
        return self.total - self._counts[ExtractionMethod.NONE]

    def count(self, method: ExtractionMethod) -> int:
        return self._counts[method]

    def success_rate(self) -> str:
        """Share of successful extractions, formatted like ``"66.67%"``."""
        if not self.total:
            return "0.00%"
        return f"{self.successful / self.total * 100:.2f}%"

    def snapshot(self) -> Dict[str, Any]:
        return {
            "totalDocuments": self.total,
            "successfulExtractions": self.successful,
            "failedExtractions": self._counts[ExtractionMethod.NONE],
            "extractionMethods": {method.value: self._counts[method] for method in ExtractionMethod},
            "successRate": self.success_rate(),
        }

    def reset(self) -> None:
        self._counts.clear()
