"""Context confidence normalization."""

import logging
from typing import Tuple

from intentelect.config.settings import ElectionSettings, ZeroSumPolicy
from intentelect.domain.exceptions import DegenerateInputError
from intentelect.domain.models import ContextScore, PredictionRecord

logger = logging.getLogger(__name__)


def normalize_contexts(
    record: PredictionRecord,
    settings: ElectionSettings,
) -> Tuple[ContextScore, ...]:
    """
    Rescale every context's confidence by the included contexts' total.

    The divisor is capped at 1, so totals above 1 leave confidences as they
    are. Excluded contexts are rescaled too; the elector drops them later.
    """
    total = min(
        1.0,
        sum(p.confidence for ctx, p in record.predictions.items() if record.is_included(ctx)),
    )

    if total <= 0:
        if settings.zero_sum_policy is ZeroSumPolicy.FAIL:
            raise DegenerateInputError(
                "Included contexts have a total confidence of zero",
                total_confidence=total,
            ).add_context('included_contexts', sorted(record.included_contexts))
        logger.warning(
            "Included contexts %s sum to %s; every context gets zero weight",
            sorted(record.included_contexts), total,
        )
        return tuple(ContextScore(ctx, 0.0) for ctx in record.predictions)

    return tuple(
        ContextScore(ctx, p.confidence / total) for ctx, p in record.predictions.items()
    )
