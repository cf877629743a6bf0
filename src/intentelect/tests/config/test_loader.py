import pytest
from argparse import Namespace
from pathlib import Path

from intentelect.config.loader import ConfigurationLoader, configure_from_cli
from intentelect.config.settings import LogLevel, ZeroSumPolicy
from intentelect.domain.exceptions import ConfigurationError


class TestConfigurationLoader:

    def test_load_defaults(self):
        """Test that load_defaults returns correct default settings."""
        settings = ConfigurationLoader().load_defaults()

        # Election defaults
        assert settings.election.oos_as_none == 0.4
        assert settings.election.zero_sum_policy is ZeroSumPolicy.ZERO_WEIGHT

        # Processing defaults
        assert settings.processing.chunk_size == 1000
        assert settings.processing.show_progress is True
        assert settings.processing.fail_fast is False

        # Logging defaults
        assert settings.logging.level == LogLevel.INFO
        assert settings.logging.log_dir is None

        assert settings.input_path is None
        assert settings.debug_mode is False
        assert settings.dry_run is False

    def test_load_from_cli_args_empty_args(self):
        """Test that missing attributes fall back to defaults."""
        settings = ConfigurationLoader().load_from_cli_args(Namespace())

        assert settings.processing.chunk_size == 1000
        assert settings.input_path is None
        assert settings.output_path is None

    def test_load_from_cli_args_all_options(self):
        """Test that every CLI option lands in its settings section."""
        args = Namespace(
            input="in.jsonl",
            output="out.jsonl",
            zero_sum_policy="fail",
            chunk_size=50,
            fail_fast=True,
            no_progress=True,
            log_dir="logs",
            debug=True,
            dry_run=True,
        )

        settings = ConfigurationLoader().load_from_cli_args(args)

        assert settings.election.zero_sum_policy is ZeroSumPolicy.FAIL
        assert settings.processing.chunk_size == 50
        assert settings.processing.fail_fast is True
        assert settings.processing.show_progress is False
        assert settings.logging.log_dir == Path("logs")
        assert settings.logging.level == LogLevel.DEBUG
        assert settings.input_path == Path("in.jsonl")
        assert settings.output_path == Path("out.jsonl")
        assert settings.debug_mode is True
        assert settings.dry_run is True

    def test_unknown_policy(self):
        """Test that an unknown zero-sum policy is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationLoader().load_from_cli_args(Namespace(zero_sum_policy="ignore"))

        assert exc_info.value.context.get('config_field') == "election.zero_sum_policy"
        assert "zero_weight" in exc_info.value.suggestions[0]


class TestConfigureFromCli:

    def test_validates_loaded_settings(self):
        """Test that configure_from_cli validates what it loads."""
        with pytest.raises(ConfigurationError) as exc_info:
            configure_from_cli(Namespace(chunk_size=-1))
        assert exc_info.value.context.get('config_field') == "processing.chunk_size"

    def test_existing_input(self, tmp_path):
        """Test a valid configuration with a real input file."""
        input_path = tmp_path / "in.jsonl"
        input_path.write_text("{}\n")

        settings = configure_from_cli(Namespace(input=str(input_path), output=str(tmp_path / "out.jsonl")))

        assert settings.input_path == input_path
