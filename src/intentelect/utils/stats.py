"""Numeric helpers shared by the election stages."""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

import numpy as np

from intentelect.domain.exceptions import InvalidInputError

# Beyond this the CDF is 0 or 1 to well under the rounding precision we use
CDF_Z_LIMIT = 6.5


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation of a 1-d sequence."""
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise InvalidInputError(
            "standard deviation expects a 1-d sequence",
            operation="standard_deviation",
            field_name="values",
        )
    if arr.size == 0:
        raise InvalidInputError(
            "cannot compute the standard deviation of an empty sequence",
            operation="standard_deviation",
            field_name="values",
        )
    return float(np.std(arr))


def standard_normal_cdf(z: float) -> float:
    """
    Phi(z) for the standard normal distribution.

    NaN propagates so callers can pick their own default.
    """
    if math.isnan(z):
        return math.nan
    if z < -CDF_Z_LIMIT:
        return 0.0
    if z > CDF_Z_LIMIT:
        return 1.0
    return 0.5 * (1.0 + math.erf(z / math.sqrt(2.0)))


def all_in_range(values: Sequence[float], low: float, high: float) -> bool:
    """True when every value lies in the closed interval [low, high]."""
    return all(low <= v <= high for v in values)


def round_half_away(value: float, places: int) -> float:
    """Round half away from zero, working from the shortest decimal repr."""
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def safe_divide(numerator: float, denominator: float) -> float:
    """IEEE-754 division: x/0 gives +-inf, 0/0 and inf/inf give NaN."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


def safe_log(value: float) -> float:
    """Natural log with log(0) == -inf instead of a ValueError."""
    with np.errstate(divide="ignore"):
        return float(np.log(np.float64(value)))
