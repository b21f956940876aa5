# campus_nav/core/logger.py
from loguru import logger

from campus_nav.core.config import settings
from campus_nav.core.logging_config import setup_logging

setup_logging(settings.LOG_LEVEL)

__all__ = ["logger"]
