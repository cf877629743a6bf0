"""Core domain models and exceptions."""

from .models import (
    NO_INTENT,
    NONE_LABEL,
    NoIntent,
    IntentScore,
    ContextPrediction,
    PredictionRecord,
    ContextScore,
    IntentCandidate,
    CandidatePrediction,
    ElectionResult,
    is_no_intent,
)

__all__ = [
    "NO_INTENT",
    "NONE_LABEL",
    "NoIntent",
    "IntentScore",
    "ContextPrediction",
    "PredictionRecord",
    "ContextScore",
    "IntentCandidate",
    "CandidatePrediction",
    "ElectionResult",
    "is_no_intent",
]
