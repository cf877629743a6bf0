"""Intent election stages and the pipeline composing them."""

from .normalizer import normalize_contexts
from .aggregator import aggregate_context, aggregate_all
from .elector import elect
from .ambiguity import detect_ambiguity
from .slots import resolve_slots
from .pipeline import run_election, ElectionPipeline

__all__ = [
    "normalize_contexts",
    "aggregate_context",
    "aggregate_all",
    "elect",
    "detect_ambiguity",
    "resolve_slots",
    "run_election",
    "ElectionPipeline",
]
