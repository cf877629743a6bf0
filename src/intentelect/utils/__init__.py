"""Utility functions and helpers."""

from .itertools import chunked
from .logging import setup_logging
from .stats import (
    standard_deviation,
    standard_normal_cdf,
    all_in_range,
    round_half_away,
)

__all__ = [
    "chunked",
    "setup_logging",
    "standard_deviation",
    "standard_normal_cdf",
    "all_in_range",
    "round_half_away",
]
