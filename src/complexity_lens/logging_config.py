"""Logging for Complexity Lens.

Terminal output goes through rich. The package logger's level follows the
``verbosity`` setting of :class:`~complexity_lens.config.AnalyzerConfig`,
so a config file or ``COMPLEXITY_LENS_VERBOSITY`` can turn on debug output
without any CLI flag.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import AnalyzerConfig

ROOT_LOGGER = "complexity_lens"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def verbosity_for(verbose: bool = False, quiet: bool = False) -> str:
    """Verbosity name for the CLI's ``--verbose`` / ``--quiet`` flags; quiet wins."""
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    return "normal"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install the rich handler and set the initial level from CLI flags.

    Called before configuration is loaded so that config errors are
    reported; :func:`configure_logging` then applies the loaded verbosity.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to write logs to

    Returns:
        The complexity_lens package logger
    """
    verbosity = verbosity_for(verbose, quiet)
    level = VERBOSITY_LEVELS[verbosity]

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # Engine warnings may contain brackets
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def configure_logging(config: "AnalyzerConfig") -> logging.Logger:
    """Set the package log level from a loaded configuration."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(VERBOSITY_LEVELS[config.verbosity])
    logger.debug("Log verbosity set to %s", config.verbosity)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'complexity_lens.engine')
              If None, returns the root complexity_lens logger
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
