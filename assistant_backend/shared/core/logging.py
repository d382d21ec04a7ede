"""
Loguru configuration.
"""

import sys
from loguru import logger

from .config import Settings


def configure_logging(settings: Settings) -> None:
    """Replace the default sink with ones driven by settings."""
    serialize = settings.log_format.lower() == "json"
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level.upper(), serialize=serialize, enqueue=False)
    if settings.log_file:
        logger.add(
            settings.log_file,
            level=settings.log_level.upper(),
            serialize=serialize,
            rotation="1 day",
            retention="7 days",
        )
