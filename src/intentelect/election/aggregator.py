"""Per-context intent aggregation and top-2 confusion resolution."""

import logging
import math
from typing import List, Sequence

from intentelect.config.settings import ElectionSettings
from intentelect.domain.models import (
    NO_INTENT,
    CandidatePrediction,
    ContextPrediction,
    ContextScore,
    IntentCandidate,
    PredictionRecord,
)
from intentelect.utils.stats import (
    round_half_away,
    safe_divide,
    safe_log,
    standard_deviation,
    standard_normal_cdf,
)

logger = logging.getLogger(__name__)

INTENT_PRECISION = 2
CANDIDATE_PRECISION = 3
UNDECIDED_P1 = 0.5


def build_intent_candidates(
    prediction: ContextPrediction,
    settings: ElectionSettings,
) -> List[IntentCandidate]:
    """Context intents plus an out-of-scope candidate, rounded and ranked."""
    candidates = [IntentCandidate(i.label, i.confidence) for i in prediction.intents]
    if prediction.oos >= settings.oos_as_none:
        candidates.append(IntentCandidate(NO_INTENT, prediction.oos))

    rounded = [
        IntentCandidate(c.label, round_half_away(c.confidence, INTENT_PRECISION))
        for c in candidates
    ]
    return sorted(rounded, key=lambda c: c.confidence, reverse=True)


def predictions_really_confused(
    candidates: Sequence[IntentCandidate],
    settings: ElectionSettings,
) -> bool:
    """True when the three best candidates are statistically indistinguishable.

    Expects ``candidates`` ranked best first.
    """
    if len(candidates) <= 2:
        return False

    std = standard_deviation([c.confidence for c in candidates])
    diff = safe_divide(candidates[0].confidence - candidates[1].confidence, std)
    if diff >= settings.confusion_diff_threshold:
        return False

    best_of_3_std = standard_deviation([c.confidence for c in candidates[:3]])
    return best_of_3_std <= settings.confusion_top3_std


def top_two_split(candidates: Sequence[IntentCandidate]) -> float:
    """
    Share of the context weight that goes to the best candidate.

    Confidence ratios are treated as log-normal: the log gap between the two
    leaders, in units of the spread of all log confidences, is fed to the
    standard normal CDF. An undefined result splits evenly.
    """
    logs = [safe_log(c.confidence) for c in candidates if c.confidence != 0]
    lnstd = standard_deviation(logs) if logs else math.nan

    gap = safe_log(candidates[0].confidence) - safe_log(candidates[1].confidence)
    p1 = standard_normal_cdf(safe_divide(gap, lnstd))
    if math.isnan(p1):
        return UNDECIDED_P1
    return p1


def aggregate_context(
    context_score: ContextScore,
    prediction: ContextPrediction,
    settings: ElectionSettings,
) -> List[CandidatePrediction]:
    """Turn one context's raw prediction into weighted election candidates."""
    ctx = context_score.context
    if not prediction.intents:
        logger.debug("Context %s has no intents; it contributes no candidates", ctx)
        return []

    candidates = build_intent_candidates(prediction, settings)

    if candidates[0].confidence == 1 or len(candidates) == 1:
        return [CandidatePrediction(candidates[0].label, ctx, 1.0)]

    if predictions_really_confused(candidates, settings):
        logger.debug("Context %s is really confused; electing no intent first", ctx)
        candidates.insert(0, IntentCandidate(NO_INTENT, 1.0))

    p1 = top_two_split(candidates)
    weight = context_score.confidence
    return [
        CandidatePrediction(
            candidates[0].label, ctx, round_half_away(weight * p1, CANDIDATE_PRECISION)
        ),
        CandidatePrediction(
            candidates[1].label, ctx, round_half_away(weight * (1 - p1), CANDIDATE_PRECISION)
        ),
    ]


def aggregate_all(
    record: PredictionRecord,
    context_scores: Sequence[ContextScore],
    settings: ElectionSettings,
) -> List[CandidatePrediction]:
    """Flatten the candidates of every context, in context order."""
    out: List[CandidatePrediction] = []
    for score in context_scores:
        prediction = record.predictions.get(score.context)
        if prediction is None:
            continue
        out.extend(aggregate_context(score, prediction, settings))
    return out
