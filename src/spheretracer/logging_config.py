"""Logging configuration for spheretracer."""

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

PACKAGE_LOGGER = "spheretracer"


def configure_logging(
    level: str | int = "INFO",
    log_file: Path | None = None,
) -> logging.Logger:
    """
    Set up logging for the package.

    Installs a console handler (and optionally a file handler) on the package
    logger. Calling it again replaces the handlers installed before, so the
    output is never duplicated.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number
        log_file: Optional path of a log file to write as well

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
