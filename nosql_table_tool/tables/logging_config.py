"""
Logging configuration with multi-level verbosity.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import logging
import sys

_LIBRARY_LOGGERS = ("boto3", "botocore", "urllib3")


def setup_logging(verbose_count: int = 0) -> None:
    """
    Configure logging based on verbosity level.

    Args:
        verbose_count: Number of -v flags (0=WARNING, 1=INFO, 2=DEBUG, 3+=TRACE)
    """
    if verbose_count == 0:
        level = logging.WARNING
    elif verbose_count == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    # Logs go to stderr so stdout stays parseable JSON
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )

    # AWS SDK logging only at TRACE level
    library_level = logging.DEBUG if verbose_count >= 3 else logging.WARNING
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
