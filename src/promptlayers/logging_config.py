"""
promptlayers - Logging setup for the CLI and scripts.

Library modules only create loggers; handlers are installed here.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: str | int = "INFO", verbose: bool = False) -> None:
    """Setup logging with visible output on stderr."""
    if verbose:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
