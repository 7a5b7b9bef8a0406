# src/config/logging_config.py

"""Per-run logging for price_aggregator.

Every launch (API server or one-shot CLI search) writes to its own file
under ``logs/``, e.g. ``logs/run_20260214_153045.log``.  The file captures
everything from the ``price_aggregator.*`` hierarchy at DEBUG; the console
only shows warnings and errors so CLI JSON output on stdout stays clean.

When serving the API, uvicorn's own loggers are attached to the same file
so request lines and our pipeline records interleave in one place.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "price_aggregator"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that share our run file when present
_ATTACHED_LOGGERS = ("uvicorn.error", "uvicorn.access")


def _log_file_path(logs_dir: Path) -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return logs_dir / f"run_{stamp}.log"


def setup_logging(console_level: int = logging.WARNING) -> Path:
    """Configure the ``price_aggregator`` logger for this run.

    Safe to call more than once: a logger that already has handlers is
    left untouched and its current run file is returned.

    Args:
        console_level: Minimum level echoed to stderr.

    Returns:
        The path of the log file for this run.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)

    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = _log_file_path(logs_dir)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    for name in _ATTACHED_LOGGERS:
        logging.getLogger(name).addHandler(file_handler)

    root_logger.info(
        "Logging initialised (env=%s) — log file: %s",
        Settings.APP_ENV,
        log_file,
    )
    return log_file
