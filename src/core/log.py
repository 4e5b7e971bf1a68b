# core/log.py
import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Replace loguru's default sink with a stderr sink at the given level.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...).
        log_file: Optional path; when given, a rotating file sink is added too.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
    if log_file:
        logger.add(log_file, level=level.upper(), rotation="10 MB", retention=5)
