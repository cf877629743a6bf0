"""Custom exceptions for the intentelect package."""

# Base exceptions
from .base import (
    IntentElectError,
    ConfigurationError,
)

# Validation exceptions
from .validation import (
    ValidationError,
    InvalidInputError,
    ParameterValidationError,
)

# Election exceptions
from .election import (
    ElectionError,
    DegenerateInputError,
    NotFoundError,
)

# Processing exceptions
from .processing import (
    ProcessingError,
    BatchProcessingError,
)

__all__ = [
    # Base
    "IntentElectError",
    "ConfigurationError",

    # Validation
    "ValidationError",
    "InvalidInputError",
    "ParameterValidationError",

    # Election
    "ElectionError",
    "DegenerateInputError",
    "NotFoundError",

    # Processing
    "ProcessingError",
    "BatchProcessingError",
]
