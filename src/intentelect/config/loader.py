"""Configuration loading from CLI and programmatic sources."""

import logging
from pathlib import Path
from dataclasses import replace
from intentelect.config.settings import (
    Settings, ElectionSettings, ProcessingSettings, LoggingSettings,
    LogLevel, ZeroSumPolicy
)
from intentelect.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

class ConfigurationLoader:
    """Loads configuration from CLI args and system defaults."""

    def load_from_cli_args(self, args) -> Settings:
        """Load configuration from CLI arguments."""
        try:
            settings = self.load_defaults()

            election_updates = {}
            if getattr(args, 'zero_sum_policy', None):
                try:
                    election_updates['zero_sum_policy'] = ZeroSumPolicy(args.zero_sum_policy)
                except ValueError as e:
                    raise ConfigurationError(
                        f"Unknown zero-sum policy: {args.zero_sum_policy}",
                        config_field="election.zero_sum_policy"
                    ).add_suggestion(
                        f"Use one of: {', '.join(p.value for p in ZeroSumPolicy)}"
                    ) from e

            processing_updates = {}
            if getattr(args, 'chunk_size', None):
                processing_updates['chunk_size'] = args.chunk_size
            if getattr(args, 'fail_fast', False):
                processing_updates['fail_fast'] = True
            if getattr(args, 'no_progress', False):
                processing_updates['show_progress'] = False

            logging_updates = {}
            if getattr(args, 'log_dir', None):
                logging_updates['log_dir'] = Path(args.log_dir)
            if getattr(args, 'debug', False):
                logging_updates['level'] = LogLevel.DEBUG

            input_path = Path(args.input) if getattr(args, 'input', None) else None
            output_path = Path(args.output) if getattr(args, 'output', None) else None

            return replace(
                settings,
                election=replace(settings.election, **election_updates),
                processing=replace(settings.processing, **processing_updates),
                logging=replace(settings.logging, **logging_updates),
                input_path=input_path,
                output_path=output_path,
                debug_mode=bool(getattr(args, 'debug', False)),
                dry_run=bool(getattr(args, 'dry_run', False)),
            )

        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(
                f"Failed to load configuration from CLI arguments: {str(e)}"
            ) from e

    def load_defaults(self) -> Settings:
        """Load default configuration settings."""
        return Settings(
            election=ElectionSettings(
                oos_as_none=0.4,
                low_intent_confidence=0.4,
                ambiguity_band=0.1,
                confusion_diff_threshold=2.5,
                confusion_top3_std=0.03,
                zero_sum_policy=ZeroSumPolicy.ZERO_WEIGHT,
                global_context="global",
            ),
            processing=ProcessingSettings(
                chunk_size=1000,
                show_progress=True,
                fail_fast=False,
            ),
            logging=LoggingSettings(
                level=LogLevel.INFO,
                log_dir=None,
                console_output=True,
            ),
            debug_mode=False,
            dry_run=False,
        )

def configure_from_cli(args) -> Settings:
    """Main entry point to configure settings from CLI args."""
    loader = ConfigurationLoader()
    settings = loader.load_from_cli_args(args)
    settings.validate()
    return settings
