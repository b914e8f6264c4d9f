"""Logging configuration for the command line tool."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Send service_manager log records to stderr."""
    if debug:
        level, fmt = logging.DEBUG, LOG_FORMAT
    elif verbose:
        level, fmt = logging.INFO, SIMPLE_FORMAT
    else:
        level, fmt = logging.WARNING, SIMPLE_FORMAT

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))

    root = logging.getLogger("service_manager")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
