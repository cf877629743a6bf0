"""Core configuration settings for intentelect."""

import logging
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field
from enum import Enum

from intentelect.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

class LogLevel(Enum):
    """Supported logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

class ZeroSumPolicy(Enum):
    """What to do when the included contexts have no confidence at all."""
    ZERO_WEIGHT = "zero_weight"
    FAIL = "fail"

@dataclass(frozen=True)
class ElectionSettings:
    """Thresholds of the election algorithm.

    The confusion thresholds are empirical; keep them unless the
    classifiers upstream are recalibrated.
    """
    oos_as_none: float = 0.4
    low_intent_confidence: float = 0.4
    ambiguity_band: float = 0.1
    confusion_diff_threshold: float = 2.5
    confusion_top3_std: float = 0.03
    zero_sum_policy: ZeroSumPolicy = ZeroSumPolicy.ZERO_WEIGHT
    global_context: str = "global"

    def validate(self) -> None:
        """Validate election settings."""
        for name in ("oos_as_none", "low_intent_confidence", "ambiguity_band"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(
                    f"{name} must lie in [0, 1], got {value}",
                    config_field=f"election.{name}"
                )

        if self.confusion_diff_threshold <= 0:
            raise ConfigurationError(
                "confusion_diff_threshold must be positive",
                config_field="election.confusion_diff_threshold"
            )

        if self.confusion_top3_std < 0:
            raise ConfigurationError(
                "confusion_top3_std must be non-negative",
                config_field="election.confusion_top3_std"
            )

        if not isinstance(self.zero_sum_policy, ZeroSumPolicy):
            raise ConfigurationError(
                f"Invalid zero_sum_policy: {self.zero_sum_policy}",
                config_field="election.zero_sum_policy"
            ).add_suggestion(f"Use one of: {[p.value for p in ZeroSumPolicy]}")

        if not self.global_context:
            raise ConfigurationError(
                "global_context must be a non-empty string",
                config_field="election.global_context"
            )

@dataclass
class ProcessingSettings:
    """Batch processing configuration."""
    chunk_size: int = 1000
    show_progress: bool = True
    fail_fast: bool = False

    def validate(self) -> None:
        """Validate processing settings."""
        if self.chunk_size <= 0:
            raise ConfigurationError(
                "chunk_size must be positive",
                config_field="processing.chunk_size"
            )

@dataclass
class LoggingSettings:
    """Logging configuration."""
    level: LogLevel = LogLevel.INFO
    log_dir: Optional[Path] = None
    console_output: bool = True

    def validate(self) -> None:
        """Validate logging settings."""
        if self.log_dir and self.log_dir.exists() and not self.log_dir.is_dir():
            raise ConfigurationError(
                f"Log path is not a directory: {self.log_dir}",
                config_field="logging.log_dir"
            ).add_suggestion("Point --log-dir at a directory")

@dataclass
class Settings:
    """Main configuration settings for intentelect."""

    election: ElectionSettings = field(default_factory=ElectionSettings)
    processing: ProcessingSettings = field(default_factory=ProcessingSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    # Runtime settings
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None

    # Debug/development settings
    debug_mode: bool = False
    dry_run: bool = False

    def validate(self) -> None:
        """Validate all configuration settings."""
        try:
            self.election.validate()
            self.processing.validate()
            self.logging.validate()

            self._validate_paths()

        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(
                f"Configuration validation failed: {str(e)}"
            ) from e

    def _validate_paths(self) -> None:
        """Validate input/output paths when a batch run is configured."""
        if self.input_path is not None and not self.input_path.is_file():
            raise ConfigurationError(
                f"Input file does not exist: {self.input_path}",
                config_field="input_path"
            ).add_suggestion("Provide a JSON Lines file of prediction records")

        if self.output_path is not None and self.input_path is not None:
            if self.output_path.resolve() == self.input_path.resolve():
                raise ConfigurationError(
                    "Output path must differ from the input path",
                    config_field="output_path"
                )

    def to_dict(self) -> dict:
        """Convert settings to dictionary for debugging."""
        return {
            'election': {
                'oos_as_none': self.election.oos_as_none,
                'low_intent_confidence': self.election.low_intent_confidence,
                'ambiguity_band': self.election.ambiguity_band,
                'confusion_diff_threshold': self.election.confusion_diff_threshold,
                'confusion_top3_std': self.election.confusion_top3_std,
                'zero_sum_policy': self.election.zero_sum_policy.value,
            },
            'processing': {
                'chunk_size': self.processing.chunk_size,
                'show_progress': self.processing.show_progress,
                'fail_fast': self.processing.fail_fast,
            },
            'logging': {
                'level': self.logging.level.value,
                'log_dir': str(self.logging.log_dir) if self.logging.log_dir else None,
            },
            'runtime': {
                'input_path': str(self.input_path) if self.input_path else None,
                'output_path': str(self.output_path) if self.output_path else None,
                'debug_mode': self.debug_mode,
                'dry_run': self.dry_run,
            }
        }

# Global settings instance
_settings: Optional[Settings] = None

def get_settings() -> Settings:
    """Get the current global settings instance."""
    global _settings
    if _settings is None:
        raise ConfigurationError(
            "Settings not initialized. Call set_settings() first."
        ).add_suggestion("Initialize settings in your application startup")
    return _settings

def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    settings.validate()  # Validate before setting
    _settings = settings
    logger.info("Configuration loaded and validated successfully")

def reset_settings() -> None:
    """Forget the global settings instance."""
    global _settings
    _settings = None
