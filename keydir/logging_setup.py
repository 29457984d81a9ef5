"""Logging configuration for the command-line entry point.

Log records go to a rotating file under the platform log directory so they
never interleave with the raw-mode terminal menu. Library use leaves
handler configuration to the host application.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

LOG_DIR = Path(user_log_dir("keydir", appauthor=False))
LOG_FILENAME = "keydir.log"
_MAX_LOG_BYTES = 1024 * 1024
_BACKUP_COUNT = 2


def configure_logging(verbose: bool = False, log_dir: Path | None = None) -> Path | None:
    """Attach a rotating file handler to the ``keydir`` logger.

    Returns the log file path, or ``None`` when the directory is unwritable.
    """
    package_logger = logging.getLogger("keydir")
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if any(isinstance(handler, RotatingFileHandler) for handler in package_logger.handlers):
        return None

    directory = log_dir or LOG_DIR
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    log_file = directory / LOG_FILENAME
    handler = RotatingFileHandler(log_file, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    package_logger.addHandler(handler)
    return log_file
