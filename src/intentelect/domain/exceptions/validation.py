"""Input validation exceptions."""

from typing import Optional, Any
from .base import IntentElectError

class ValidationError(IntentElectError):
    """Base class for validation errors."""

    def __init__(
        self,
        message: str,
        *,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        if field_name:
            self.add_context('field_name', field_name)
        if field_value is not None:
            self.add_context('field_value', str(field_value))

    def _get_default_error_code(self) -> str:
        return "VALIDATION_ERROR"


class InvalidInputError(ValidationError):
    """Raised when numeric input or a prediction record is malformed."""

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        if operation:
            self.add_context('operation', operation)

    def _get_default_error_code(self) -> str:
        return "INVALID_INPUT"


class ParameterValidationError(ValidationError):
    """Raised when parameter validation fails."""
    def __init__(
        self,
        message: str,
        *,
        parameter_name: str,
        parameter_value: Any,
        expected_type: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, field_name=parameter_name, field_value=parameter_value, **kwargs)
        if expected_type:
            self.add_context('expected_type', expected_type)
        self.add_suggestion(f"Check the value and type of parameter '{parameter_name}'")
    def _get_default_error_code(self) -> str:
        return "PARAMETER_VALIDATION_FAILED"
