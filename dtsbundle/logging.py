"""Logger hierarchy and handler setup for the dtsbundle pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "dtsbundle"

STREAM_FORMAT = "[dtsbundle] %(levelname)s %(message)s"
# Verbose output names the emitting stage (bundler.resolver, registry, ...).
VERBOSE_STREAM_FORMAT = "[dtsbundle] %(levelname)s %(component)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(component)s: %(message)s"


class _ComponentFilter(logging.Filter):
    """Expose the logger name relative to the dtsbundle root as `component`."""

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = f"{ROOT_LOGGER}."
        name = record.name
        record.component = name[len(prefix):] if name.startswith(prefix) else name
        return True


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the logger for one pipeline component, e.g. `bundler.resolver`."""
    return logging.getLogger(f"{ROOT_LOGGER}.{component}" if component else ROOT_LOGGER)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send dtsbundle records to stderr and, when given, to a log file.

    Verbose mode lowers the level to DEBUG, which surfaces per-directive
    resolution detail and duplicate symbol names. Calling this again replaces
    the previous handlers.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.addFilter(_ComponentFilter())
    stream_handler.setFormatter(
        logging.Formatter(VERBOSE_STREAM_FORMAT if verbose else STREAM_FORMAT)
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        # The file keeps DEBUG detail even when the console is at INFO.
        logger.setLevel(logging.DEBUG)
        file_handler.setLevel(logging.DEBUG)
        file_handler.addFilter(_ComponentFilter())
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]
