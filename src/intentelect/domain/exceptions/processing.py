"""Batch processing exceptions."""

from typing import Optional
from .base import IntentElectError

class ProcessingError(IntentElectError):
    """Base class for batch processing errors."""

    def __init__(
        self,
        message: str,
        *,
        stage: Optional[str] = None,
        record_index: Optional[int] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        if stage:
            self.add_context('processing_stage', stage)
        if record_index is not None:
            self.add_context('record_index', record_index)


class BatchProcessingError(ProcessingError):
    """Raised when a batch of prediction records fails."""

    def __init__(
        self,
        message: str,
        *,
        batch_size: Optional[int] = None,
        failed_count: Optional[int] = None,
        **kwargs
    ):
        super().__init__(message, stage="batch_processing", **kwargs)
        if batch_size:
            self.add_context('batch_size', batch_size)
        if failed_count:
            self.add_context('failed_records', failed_count)

        self.add_suggestion("Check the input file is JSON Lines with one record per line")

    def _get_default_error_code(self) -> str:
        return "BATCH_PROCESSING_FAILED"
