"""Logging configuration."""
import logging
import sys
from typing import Optional

from app.core.config import settings

# Client libraries that log every request at INFO
NOISY_LOGGERS = ["httpx", "httpcore", "openai"]


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure application logging.

    Args:
        level: Root log level name; defaults to ``settings.log_level``
    """
    log_level = (level or settings.log_level).upper()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )
    # basicConfig is a no-op once handlers exist, so set the level explicitly
    logging.getLogger().setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
