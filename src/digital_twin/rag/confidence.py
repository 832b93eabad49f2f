"""Confidence estimation from retrieval scores."""

import math
from abc import ABC, abstractmethod
from typing import Sequence


class ConfidenceStrategy(ABC):
    """Maps the similarity scores of retrieved chunks to a confidence value."""

    @abstractmethod
    def estimate(self, scores: Sequence[float]) -> float:
        pass


class MeanScoreConfidence(ConfidenceStrategy):
    """Mean similarity score, rounded half-up to two decimals.

    Measures retrieval strength only; the generated answer is not inspected.
    """

    def estimate(self, scores: Sequence[float]) -> float:
        if not scores:
            return 0.0
        mean = sum(scores) / len(scores)
        return math.floor(mean * 100 + 0.5) / 100


_default_strategy = MeanScoreConfidence()


def estimate_confidence(scores: Sequence[float]) -> float:
    """Estimate confidence with the default strategy."""
    return _default_strategy.estimate(scores)
