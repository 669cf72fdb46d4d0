"""Console and file logging for the lookalike command line.

Library modules log through :func:`get_logger` and never install handlers.
The CLI calls :func:`setup_logging` once per command. Command output goes
to stdout through ``click.echo``; log records go to stderr so that
``lookalike similar --format json`` stays machine-readable even when a
registry search fails and a warning is emitted.
"""

from __future__ import annotations

import logging
from pathlib import Path

ROOT = "lookalike"

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class ConsoleFormatter(logging.Formatter):
    """Terse stderr format.

    Informational records are printed bare. Warnings and errors are
    prefixed with the level and the module that raised them, e.g.
    ``warning [registry]: Registry returned 503 for vue``.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        if record.levelno < logging.WARNING:
            return message
        source = record.name.removeprefix(f"{ROOT}.")
        if source == ROOT:
            return f"{record.levelname.lower()}: {message}"
        return f"{record.levelname.lower()} [{source}]: {message}"


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Install the stderr handler, and a file handler if *log_file* is set.

    ``verbose`` takes precedence over ``quiet``. The file handler records
    everything at DEBUG and appends, so several commands can share one log.
    Handlers from a previous call are closed and replaced.
    """
    logger = logging.getLogger(ROOT)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(_console_level(verbose, quiet))
    console.setFormatter(ConsoleFormatter())
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``lookalike.<name>`` logger.

    Accepts either a short name (``"registry"``) or a module ``__name__``
    (``"lookalike.registry"``).
    """
    if name == ROOT or name.startswith(f"{ROOT}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT}.{name}")
