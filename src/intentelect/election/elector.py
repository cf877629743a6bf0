"""Global election over the candidates of every context."""

import logging
from typing import List, Optional, Sequence, Tuple

from intentelect.config.settings import ElectionSettings
from intentelect.domain.models import NO_INTENT, CandidatePrediction, PredictionRecord

logger = logging.getLogger(__name__)


def rank_candidates(
    candidates: Sequence[CandidatePrediction],
    record: PredictionRecord,
) -> List[CandidatePrediction]:
    """Best first, included contexts only, first occurrence of each name kept."""
    ranked = sorted(candidates, key=lambda c: c.confidence, reverse=True)
    seen = set()
    out: List[CandidatePrediction] = []
    for cand in ranked:
        if not record.is_included(cand.context):
            continue
        if cand.name in seen:
            continue
        seen.add(cand.name)
        out.append(cand)
    return out


def should_consider_oos(
    ranked: Sequence[CandidatePrediction],
    record: PredictionRecord,
    settings: ElectionSettings,
) -> bool:
    """A weak real intent loses to a strong out-of-scope score of its context."""
    if not ranked:
        return True
    top = ranked[0]
    oos = record.oos_for(top.context)
    return (
        not top.is_no_intent
        and top.confidence < settings.low_intent_confidence
        and oos is not None
        and oos > settings.oos_as_none
    )


def elect(
    candidates: Sequence[CandidatePrediction],
    record: PredictionRecord,
    settings: ElectionSettings,
) -> Tuple[Optional[CandidatePrediction], Tuple[CandidatePrediction, ...]]:
    """Return the elected candidate and the final ranked list."""
    ranked = rank_candidates(candidates, record)
    primary_context = ranked[0].context if ranked else settings.global_context

    if should_consider_oos(ranked, record, settings):
        oos = record.oos_for(primary_context)
        none_candidate = CandidatePrediction(
            NO_INTENT, primary_context, oos if oos is not None else 1.0
        )
        logger.debug("Out-of-scope override in context %s", primary_context)
        # Ascending, unlike every other ranking in the pipeline
        ranked = sorted(
            [c for c in ranked if not c.is_no_intent] + [none_candidate],
            key=lambda c: c.confidence,
        )

    elected = max(ranked, key=lambda c: c.confidence) if ranked else None
    return elected, tuple(ranked)
