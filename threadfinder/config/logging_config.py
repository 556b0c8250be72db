# threadfinder/config/logging_config.py

"""Per-run logging for threadfinder.

Every launch (API server, CLI search, health check) writes one file,
``logs/run_<YYYYMMDD>_<HHMMSS>.log``.  All ``threadfinder.*`` loggers
propagate into it: the aggregator, the API and each store adapter
(``threadfinder.<store_id>``).

Adapter failures are written here with full tracebacks; API clients
only ever see the short per-store ``error`` string.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from threadfinder.config.settings import Settings

PROJECT_LOGGER = "threadfinder"

_FILE_FORMAT = (
    "%(asctime)s.%(msecs)03d %(levelname)-7s [%(name)s] "
    "%(filename)s:%(lineno)d %(message)s"
)
_STDERR_FORMAT = "%(levelname)-7s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _handler(
    handler: logging.Handler, level: int, fmt: str,
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=_DATE_FORMAT))
    return handler


def setup_logging(logs_dir: Path | None = None) -> Path:
    """Attach the run-log file handler and a quiet stderr handler.

    Safe to call more than once (uvicorn reload, tests): handlers are
    only attached the first time.

    Args:
        logs_dir: Where to write the run log; ``Settings.LOGS_DIR`` when
            omitted.

    Returns:
        Path of this run's log file.
    """
    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    log_file = target_dir / datetime.now().strftime("run_%Y%m%d_%H%M%S.log")

    project_logger = logging.getLogger(PROJECT_LOGGER)
    project_logger.setLevel(logging.DEBUG)
    if project_logger.handlers:
        return log_file

    project_logger.addHandler(
        _handler(
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.DEBUG,
            _FILE_FORMAT,
        )
    )
    # Warnings and errors only, so CLI JSON on stdout stays readable
    project_logger.addHandler(
        _handler(
            logging.StreamHandler(sys.stderr),
            logging.WARNING,
            _STDERR_FORMAT,
        )
    )

    project_logger.info("Run log opened at %s", log_file)
    return log_file
