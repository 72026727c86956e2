"""Application logging set-up: console plus optional log file."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "zandoli"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}


def init_logger(level: str, log_file: str) -> logging.Logger:
    """Configure and return the application logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s", datefmt="%H:%M:%S")
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError:
            sys.stdout.write(
                "[LOGGER ERROR] Failed to open log file, falling back to console only.\n"
            )
        else:
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.setLevel(_LEVELS.get(level, logging.INFO))
    logger.propagate = False
    return logger