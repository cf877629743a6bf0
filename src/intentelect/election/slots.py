"""Pass-through of the slots predicted for the elected intent."""

import logging
from dataclasses import replace
from typing import Any, Tuple

from intentelect.domain.exceptions import NotFoundError
from intentelect.domain.models import (
    CandidatePrediction,
    ElectionResult,
    PredictionRecord,
    format_label,
)

logger = logging.getLogger(__name__)


def find_intent_slots(record: PredictionRecord, candidate: CandidatePrediction) -> Tuple[Any, ...]:
    """Slots of the raw intent entry the candidate was elected from."""
    prediction = record.predictions.get(candidate.context)
    entry = prediction.find_intent(candidate.name) if prediction is not None else None
    if entry is None:
        raise NotFoundError(
            f"No raw prediction for intent '{format_label(candidate.name)}' "
            f"in context '{candidate.context}'",
            intent_name=format_label(candidate.name),
            context_name=candidate.context,
        )
    return entry.slots


def resolve_slots(result: ElectionResult, record: PredictionRecord) -> ElectionResult:
    """Attach slots to an unambiguous real intent; otherwise return as is."""
    elected = result.intent
    if elected is None or elected.is_no_intent or not elected.name:
        return result
    if not record.predictions or result.ambiguous:
        return result

    try:
        slots = find_intent_slots(record, elected)
    except NotFoundError as e:
        logger.warning("Slots not resolved: %s", e.message)
        return result
    return replace(result, slots=slots)
