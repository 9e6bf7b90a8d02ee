"""Logging setup for applications embedding Quarry.

The library only creates module loggers; handlers are installed by the
application (the CLI calls configure_logging).
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Send quarry logs to stderr with a timestamped format.

    Args:
        level: Log level for the quarry logger (name or number).
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger("quarry")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    # Reduce noise from verbose third-party libraries
    logging.getLogger("LiteLLM").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
