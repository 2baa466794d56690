"""
Logging setup for the engine and its API.
"""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(debug: bool = False) -> int:
    """Configure logging with loguru.

    Replaces loguru's default handler with a formatted stderr sink.

    Args:
        debug: Emit DEBUG records when True, INFO and above otherwise

    Returns:
        Handler id of the installed sink
    """
    logger.remove()

    level = "DEBUG" if debug else "INFO"
    return logger.add(sys.stderr, format=LOG_FORMAT, level=level)
