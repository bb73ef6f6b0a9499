"""
Logging Configuration Module
============================

Provides centralized logging configuration for Infra-Nuke.

Per-resource deletion results are logged at DEBUG level, so a normal run
only shows batch-level progress. Run with ``--log-level debug`` to see
every ``[OK]`` / ``[Failed]`` line.

Functions
---------
setup_logging
    Configure application-wide logging.

Example
-------
>>> import logging
>>> from infra_nuke.core.logging import setup_logging
>>>
>>> setup_logging(level="DEBUG", log_file="infra-nuke.log")
>>> logger = logging.getLogger(__name__)
>>> logger.info("Starting nuke")

See Also
--------
rich.logging : Rich library's logging handler.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at DEBUG
NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "s3transfer")


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[str] = None,
    rich_tracebacks: bool = True,
    console: Optional[Console] = None,
) -> None:
    """
    Configure application-wide logging.

    Sets up the root logger with a Rich console handler on stderr and an
    optional file handler. Existing root handlers are replaced, so calling
    this twice does not duplicate output.

    Parameters
    ----------
    level : str or int, default="INFO"
        Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    log_file : str, optional
        Path to log file. The file always records the worker thread name,
        which makes concurrent deletions easy to follow.
    rich_tracebacks : bool, default=True
        Whether to use Rich for exception tracebacks.
    console : Console, optional
        Rich Console instance. If not provided, creates one on stderr.
    """
    level = _resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=rich_tracebacks,
        tracebacks_show_locals=False,
        markup=False,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT)
        )
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.debug(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"file={log_file or 'None'}"
    )
