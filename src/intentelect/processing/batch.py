"""Batch election over JSON Lines files of prediction records."""
import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from collections.abc import Sized
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from tqdm import tqdm

from intentelect.config.settings import ElectionSettings
from intentelect.domain.exceptions import (
    BatchProcessingError,
    IntentElectError,
    InvalidInputError,
    ParameterValidationError,
)
from intentelect.domain.models import ElectionResult, PredictionRecord
from intentelect.election.pipeline import ElectionPipeline
from intentelect.processing.validation import InputValidator
from intentelect.utils.itertools import chunked

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    """Election outcome of one record of a batch."""
    index: int
    result: Optional[ElectionResult] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.result is not None and self.error is None

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"index": self.index, **self.result.to_dict()}
        return {"index": self.index, "error": self.error, "error_code": self.error_code}


@dataclass
class BatchSummary:
    """Counts of one batch run."""
    n_records: int = 0
    n_elected: int = 0
    n_ambiguous: int = 0
    n_failed: int = 0
    output_path: Optional[str] = None
    processing_time: float = 0.0


class BatchProcessor:
    def __init__(
        self,
        chunk_size: int = 1000,
        *,
        settings: Optional[ElectionSettings] = None,
        fail_fast: bool = False,
        show_progress: bool = True,
    ):
        if chunk_size <= 0:
            raise ParameterValidationError(
                "chunk_size must be positive",
                parameter_name="chunk_size",
                parameter_value=chunk_size,
                expected_type="positive integer"
            )

        self.chunk_size = chunk_size
        self.fail_fast = fail_fast
        self.show_progress = show_progress
        self.pipeline = ElectionPipeline(settings)
        self.validator = InputValidator()

    def iter_results(self, records: Iterable[Tuple[int, Any]]) -> Iterator[BatchResult]:
        """
        Elect ``(index, raw_record)`` pairs lazily, one chunk at a time.

        Only the current chunk is held in memory, so ``records`` may be a
        generator over a large file.
        """
        total = len(records) if isinstance(records, Sized) else None
        pbar = tqdm(
            total=total,
            desc="Electing",
            unit="rec",
            disable=not self.show_progress,
        )
        try:
            for chunk in chunked(records, self.chunk_size):
                for index, data in chunk:
                    yield self._process_one(index, data)
                pbar.update(len(chunk))
        finally:
            pbar.close()

    def process_records(self, records: Iterable[Tuple[int, Any]]) -> List[BatchResult]:
        """Elect every ``(index, raw_record)`` pair, chunk by chunk."""
        results = list(self.iter_results(records))

        failed = sum(1 for r in results if not r.success)
        if failed:
            logger.warning(f"{failed}/{len(results)} records failed")
        return results

    def _process_one(self, index: int, data: Any) -> BatchResult:
        try:
            if isinstance(data, IntentElectError):
                raise data
            self.validator.validate_record(data)
            result = self.pipeline.elect(PredictionRecord.from_dict(data))
            return BatchResult(index=index, result=result)
        except IntentElectError as e:
            if self.fail_fast:
                raise BatchProcessingError(
                    f"Record {index} failed: {e.message}",
                    record_index=index,
                    failed_count=1,
                ) from e
            logger.debug(f"Record {index} failed: {e}")
            return BatchResult(index=index, error=e.message, error_code=e.error_code)

    def read_records(self, input_path: Path) -> Iterator[Tuple[int, Any]]:
        """
        Yield ``(line_number, record)`` for every non-blank line.

        Lines that are not valid JSON yield an ``InvalidInputError`` in place
        of the record so they are reported with the rest of the batch.
        """
        with open(input_path, "r", encoding="utf-8") as fh:
            for lineno, line in enumerate(fh, start=1):
                if not line.strip():
                    continue
                try:
                    yield lineno, json.loads(line)
                except json.JSONDecodeError as e:
                    yield lineno, InvalidInputError(
                        f"Line {lineno} is not valid JSON: {e.msg}",
                        operation="read_records",
                    )

    def process_file(self, input_path: Path, output_path: Path) -> BatchSummary:
        """Elect every record of ``input_path``, streaming JSON Lines results."""
        start = time.time()
        input_path = Path(input_path)
        output_path = Path(output_path)
        summary = BatchSummary(output_path=str(output_path))

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as out:
                for item in self.iter_results(self.read_records(input_path)):
                    out.write(json.dumps(item.to_dict()) + "\n")
                    summary.n_records += 1
                    if item.success:
                        summary.n_elected += 1
                        summary.n_ambiguous += int(item.result.ambiguous)
                    else:
                        summary.n_failed += 1
        except BatchProcessingError:
            raise
        except OSError as e:
            raise BatchProcessingError(
                f"I/O error during batch election: {str(e)}"
            ).add_context('input_path', str(input_path)) from e

        summary.processing_time = time.time() - start
        if summary.n_failed:
            logger.warning(f"{summary.n_failed}/{summary.n_records} records failed")
        logger.info(
            f"Elected {summary.n_elected}/{summary.n_records} records "
            f"in {summary.processing_time:.2f}s"
        )
        return summary
