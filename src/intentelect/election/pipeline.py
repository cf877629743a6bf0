"""End-to-end election of one prediction record."""

import logging
from typing import Any, Dict, Mapping, Optional

from intentelect.config.settings import ElectionSettings
from intentelect.domain.models import ElectionResult, PredictionRecord
from intentelect.election.aggregator import aggregate_all
from intentelect.election.ambiguity import detect_ambiguity
from intentelect.election.elector import elect
from intentelect.election.normalizer import normalize_contexts
from intentelect.election.slots import resolve_slots

logger = logging.getLogger(__name__)


def run_election(
    record: PredictionRecord,
    settings: Optional[ElectionSettings] = None,
) -> ElectionResult:
    """Normalize, aggregate, elect, flag ambiguity and attach slots."""
    settings = settings or ElectionSettings()

    context_scores = normalize_contexts(record, settings)
    candidates = aggregate_all(record, context_scores, settings)
    elected, intents = elect(candidates, record, settings)
    result = ElectionResult(
        intent=elected,
        intents=intents,
        ambiguous=detect_ambiguity(intents, settings),
    )
    result = resolve_slots(result, record)

    logger.debug(
        "Elected %s out of %d candidates (ambiguous=%s)",
        result.elected_name, len(intents), result.ambiguous,
    )
    return result


class ElectionPipeline:
    """Election bound to one validated set of thresholds."""

    def __init__(self, settings: Optional[ElectionSettings] = None):
        self.settings = settings or ElectionSettings()
        self.settings.validate()

    def elect(self, record: PredictionRecord) -> ElectionResult:
        return run_election(record, self.settings)

    def elect_dict(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Wire mapping in, wire mapping out."""
        return self.elect(PredictionRecord.from_dict(data)).to_dict()
