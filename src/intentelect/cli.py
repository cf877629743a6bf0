"""Command line entry point for batch intent election."""

import argparse
import logging
import sys

from intentelect.config.loader import configure_from_cli
from intentelect.config.settings import Settings, ZeroSumPolicy, set_settings
from intentelect.domain.exceptions import ConfigurationError, IntentElectError
from intentelect.processing.batch import BatchProcessor
from intentelect.utils.logging import log_batch_summary, setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the intentelect CLI."""
    parser = argparse.ArgumentParser(
        prog="intentelect",
        description=(
            "Elect one intent per utterance from the per-context scores of "
            "an ensemble of intent classifiers."
        ),
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    elect_p = sub.add_parser("elect", help="Elect intents for a JSON Lines file of predictions")
    elect_p.add_argument(
        "-i",
        "--input",
        required=True,
        help="JSON Lines file, one prediction record per line.",
    )
    elect_p.add_argument(
        "-o",
        "--output",
        required=True,
        help="JSON Lines file to write election results to.",
    )

    election_group = elect_p.add_argument_group("Election Options")
    election_group.add_argument(
        "--zero-sum-policy",
        choices=[p.value for p in ZeroSumPolicy],
        help="What to do when included contexts have zero total confidence (default: zero_weight).",
    )

    performance_group = elect_p.add_argument_group("Performance Options")
    performance_group.add_argument(
        "--chunk-size",
        type=int,
        metavar="N",
        help="Number of records elected per chunk (default: 1000).",
    )
    performance_group.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first record that fails instead of reporting it.",
    )
    performance_group.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not show a progress bar.",
    )

    debug_group = elect_p.add_argument_group("Debug Options")
    debug_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with verbose logging.",
    )
    debug_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the configuration without electing anything.",
    )
    debug_group.add_argument(
        "--log-dir",
        type=str,
        metavar="PATH",
        help="Directory for log files (default: the platform log directory).",
    )

    return parser


def main(argv=None) -> None:
    """Main entry point for the intentelect CLI."""
    args = build_parser().parse_args(argv)

    if args.cmd != "elect":
        logging.error("Unknown command: %s", args.cmd)
        sys.exit(2)

    settings = None
    try:
        settings = configure_from_cli(args)
        set_settings(settings)

        logger, summary_logger = setup_logging(
            log_dir=str(settings.logging.log_dir) if settings.logging.log_dir else None,
            console=settings.logging.console_output,
            level=settings.logging.level.value,
            quiet_console=settings.processing.show_progress and not settings.debug_mode,
        )

        if settings.debug_mode:
            logger.debug("Configuration details:")
            for section, values in settings.to_dict().items():
                logger.debug("  %s: %s", section, values)

        if settings.dry_run:
            _print_dry_run_summary(settings)
            sys.exit(0)

        processor = BatchProcessor(
            settings.processing.chunk_size,
            settings=settings.election,
            fail_fast=settings.processing.fail_fast,
            show_progress=settings.processing.show_progress,
        )
        summary = processor.process_file(settings.input_path, settings.output_path)

        log_batch_summary(summary_logger, summary)

        sys.exit(0)

    except ConfigurationError as e:
        logging.error("Configuration error: %s", e.message)
        if e.suggestions:
            logging.error("Suggestions:")
            for suggestion in e.suggestions:
                logging.error("  - %s", suggestion)
        sys.exit(1)

    except KeyboardInterrupt:
        logging.info("Election interrupted by user")
        sys.exit(130)

    except IntentElectError as e:
        logging.error("Election failed: %s", e)
        if settings is not None and settings.debug_mode:
            logging.exception("Full traceback:")
        sys.exit(1)


def _print_dry_run_summary(settings: Settings) -> None:
    """Print a summary for dry run mode."""
    print("\n" + "=" * 60)
    print("DRY RUN SUMMARY")
    print("=" * 60)
    print(f"Input file:         {settings.input_path}")
    print(f"Output file:        {settings.output_path}")
    print(f"Chunk size:         {settings.processing.chunk_size:,}")
    print(f"Zero-sum policy:    {settings.election.zero_sum_policy.value}")
    print(f"Fail fast:          {settings.processing.fail_fast}")
    print(f"Debug mode:         {settings.debug_mode}")
    print("=" * 60)
    print()


if __name__ == "__main__":
    main()
