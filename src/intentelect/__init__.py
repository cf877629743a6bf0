"""Statistical election of one intent from an ensemble of context classifiers."""

from intentelect.config.settings import ElectionSettings, ZeroSumPolicy
from intentelect.domain.models import (
    NO_INTENT,
    PredictionRecord,
    CandidatePrediction,
    ElectionResult,
)
from intentelect.election.pipeline import run_election, ElectionPipeline

__version__ = "0.1.0"

__all__ = [
    "ElectionSettings",
    "ZeroSumPolicy",
    "NO_INTENT",
    "PredictionRecord",
    "CandidatePrediction",
    "ElectionResult",
    "run_election",
    "ElectionPipeline",
]
