import logging
import logging.config
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_log_dir

APP = "intentelect"
SUMMARY = f"{APP}.summary"


def default_log_dir() -> Path:
    return Path(user_log_dir(APP))


def _logging_config(log_path: str, level: str, console: bool, quiet_console: bool) -> Dict[str, Any]:
    handlers: Dict[str, Dict[str, Any]] = {
        "file": {
            "class": "logging.FileHandler",
            "formatter": "plain",
            "filename": log_path,
            "encoding": "utf-8",
            "mode": "w",
            "level": "DEBUG",
        },
        "summary_file": {
            "class": "logging.FileHandler",
            "formatter": "summary",
            "filename": log_path,
            "encoding": "utf-8",
            "mode": "a",
            "level": "INFO",
        },
    }
    package_handlers = ["file"]
    summary_handlers = ["summary_file"]

    if console:
        # Quiet mode is for progress bars: errors still reach stderr
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "stream": "ext://sys.stderr",
            "level": "ERROR" if quiet_console else level,
        }
        handlers["summary_console"] = {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "stream": "ext://sys.stderr",
            "level": "INFO",
        }
        package_handlers.append("console")
        summary_handlers.append("summary_console")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": "{asctime} {levelname:<7} {name} - {message}", "style": "{"},
            "summary": {"format": "{asctime} SUMMARY - {message}", "style": "{"},
            "console": {"format": "{levelname:<7} {message}", "style": "{"},
        },
        "handlers": handlers,
        "loggers": {
            APP: {"level": level, "handlers": package_handlers, "propagate": False},
            SUMMARY: {"level": "INFO", "handlers": summary_handlers, "propagate": False},
        },
    }


def setup_logging(
    log_dir: Optional[str] = None,
    console: bool = True,
    level: str = "INFO",
    quiet_console: bool = False,
) -> tuple:
    """
    Configure the ``intentelect`` loggers for one election run.

    Everything from the election stages and the batch runner goes to a
    timestamped file in ``log_dir``. The ``intentelect.summary`` logger
    carries the end-of-run counts to the same file and, with ``console``,
    to stderr.

    Args:
        log_dir: Directory for log files (defaults to the platform log dir)
        console: Whether to log to stderr at all
        level: Level of the package logger
        quiet_console: Keep stderr to errors and the summary, for use with
            a progress bar

    Returns:
        ``(logger, summary_logger)``
    """
    log_dir_path = Path(log_dir) if log_dir else default_log_dir()
    log_dir_path.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = str(log_dir_path / f"{APP}_{ts}.log")

    logging.config.dictConfig(_logging_config(log_path, level.upper(), console, quiet_console))
    logging.captureWarnings(True)

    logger = logging.getLogger(APP)
    logger.info("Logging initialised. File: %s", log_path)
    return logger, logging.getLogger(SUMMARY)


def log_batch_summary(summary_logger: logging.Logger, summary) -> None:
    """Write the counts of a finished batch election to the summary logger."""
    summary_logger.info("Election completed in %.2fs", summary.processing_time)
    summary_logger.info("  Records:   %s", summary.n_records)
    summary_logger.info("  Elected:   %s", summary.n_elected)
    summary_logger.info("  Ambiguous: %s", summary.n_ambiguous)
    summary_logger.info("  Failed:    %s", summary.n_failed)
    summary_logger.info("  Output:    %s", summary.output_path)
