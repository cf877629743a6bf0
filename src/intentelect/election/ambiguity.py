"""Ambiguity detection on the final candidate list."""

from typing import Sequence

from intentelect.config.settings import ElectionSettings
from intentelect.domain.models import CandidatePrediction
from intentelect.utils.stats import all_in_range


def detect_ambiguity(
    intents: Sequence[CandidatePrediction],
    settings: ElectionSettings,
) -> bool:
    """
    Flag a distribution too flat to be decisive.

    Confidences within +-``ambiguity_band`` of a perfect tie (1/n) are
    ambiguous. A leading no-intent candidate is ignored for that check.
    """
    n = len(intents)
    if n <= 1:
        return False

    perfect = 1 / n
    low = perfect - settings.ambiguity_band
    high = perfect + settings.ambiguity_band
    confidences = [c.confidence for c in intents]

    return all_in_range(confidences, low, high) or (
        intents[0].is_no_intent and all_in_range(confidences[1:], low, high)
    )
