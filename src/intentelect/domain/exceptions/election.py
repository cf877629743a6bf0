"""Election pipeline exceptions."""

from typing import Optional
from .base import IntentElectError

class ElectionError(IntentElectError):
    """Base class for errors raised while electing an intent."""

    def __init__(
        self,
        message: str,
        *,
        stage: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        if stage:
            self.add_context('election_stage', stage)


class DegenerateInputError(ElectionError):
    """Raised when context confidences cannot be normalized."""

    def __init__(
        self,
        message: str,
        *,
        total_confidence: Optional[float] = None,
        **kwargs
    ):
        super().__init__(message, stage="normalization", **kwargs)
        if total_confidence is not None:
            self.add_context('total_confidence', total_confidence)

        self.add_suggestion("Check that at least one included context has a positive confidence")
        self.add_suggestion("Use the zero_weight policy to elect anyway")

    def _get_default_error_code(self) -> str:
        return "DEGENERATE_INPUT"


class NotFoundError(ElectionError):
    """Raised when the elected intent has no matching raw prediction."""

    def __init__(
        self,
        message: str,
        *,
        intent_name: Optional[str] = None,
        context_name: Optional[str] = None,
        **kwargs
    ):
        kwargs.setdefault('recoverable', True)
        super().__init__(message, stage="slot_resolution", **kwargs)
        if intent_name:
            self.add_context('intent_name', intent_name)
        if context_name:
            self.add_context('context_name', context_name)

    def _get_default_error_code(self) -> str:
        return "INTENT_NOT_FOUND"
