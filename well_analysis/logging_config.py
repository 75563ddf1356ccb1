"""Logging setup for the well_analysis package.

Handlers are attached to the ``well_analysis`` package logger only, so a host
application's root logging configuration is left alone. Module loggers come
from ``get_logger(__name__)`` and propagate up to the package logger.
"""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .config import AnalysisConfig

PACKAGE_LOGGER = "well_analysis"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level_number(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level}")
    return number


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
    log_file: Optional[str | Path] = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the package logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Logging level, an int or a name such as ``"INFO"``
        format_string: Record format (default: ``DEFAULT_FORMAT``)
        stream: Console stream (default: stderr)
        log_file: Optional log file, written in addition to the console

    Returns:
        The configured ``well_analysis`` logger

    Example:
        >>> from well_analysis.logging_config import configure_logging
        >>> configure_logging(level="INFO", log_file="welltest.log")
    """
    level = _level_number(level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.setLevel(level)
    package_logger.propagate = False
    return package_logger


def configure_logging_from_config(config: "AnalysisConfig") -> logging.Logger:
    """Apply the ``log_level`` and ``log_file`` settings of an AnalysisConfig."""
    return configure_logging(level=config.log_level, log_file=config.log_file)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)
