"""Logging helpers that avoid heavy dependencies."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def generate_run_id() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def configure_stdio_utf8():
    """Force stdout/stderr to UTF-8 so non-ASCII file names never crash on Windows consoles."""
    try:
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")
    except (AttributeError, ValueError):
        # Replaced streams (e.g. pytest capture) have no reconfigure.
        pass


def setup_operational_logger(run_id: str, log_dir: str | None = None):
    """
    Configure a logger for one packaging run.
    Logs go to stderr and, when `log_dir` is given, to a UTF-8 file under it.

    Returns (logger, log_file) where log_file is None without a log_dir.
    """
    logger = logging.getLogger(f"site_packager.{run_id}")
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.INFO)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    log_file: str | None = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"{run_id}_oplog.log")
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    logger.debug("Operational logging initialized for run %s", run_id)
    if log_file:
        logger.debug("Operational log file: %s", log_file)

    return logger, log_file
