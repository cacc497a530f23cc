# src/config/logging_config.py

"""Per-run timestamped logging configuration for the price tracker.

Each launch creates a dedicated log file inside ``logs/``, named with
the launch timestamp (e.g. ``logs/run_20250617_063000.log``). All
``price_tracker.*`` loggers route through this file handler so that
the scraper, the Pantry client, and the CLI share one per-run log.

The console only shows warnings unless ``--debug`` is passed, in which
case every record is echoed to stderr as well. Stdout is never used,
so JSON output stays clean.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

# Reusable format strings --------------------------------------------------

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "price_tracker"


def _console_level(debug: bool) -> int:
    return logging.DEBUG if debug else logging.WARNING


def setup_logging(debug: bool = False) -> Path:
    """Initialise the root ``price_tracker`` logger for the current run.

    Args:
        debug: Echo DEBUG records to the console instead of only
            warnings and errors.

    Returns:
        The :class:`~pathlib.Path` to the log file created for this run.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    # --- Root project logger -----------------------------------------------
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls only adjust the console verbosity
    if root_logger.handlers:
        for handler in root_logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(_console_level(debug))
        return log_file

    # --- File handler (DEBUG+) – captures everything -----------------------
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    # --- Console handler (WARNING+, or DEBUG+ with --debug) ----------------
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(_console_level(debug))
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info(
        "Logging initialised (debug=%s), log file: %s", debug, log_file
    )

    return log_file
