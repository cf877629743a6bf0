"""Batch processing of prediction records"""

from .batch import BatchProcessor, BatchResult, BatchSummary
from .validation import InputValidator

__all__ = [
    "BatchProcessor",
    "BatchResult",
    "BatchSummary",
    "InputValidator",
]
