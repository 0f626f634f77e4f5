"""
Logging Configuration
Console and optional file sinks for loguru
"""

import os
import sys
from typing import Optional

from loguru import logger

from blockchain.errors import DeployError

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Configure loguru for a script run

    Progress and errors go to stderr so stdout only carries results.

    Args:
        level: Console log level
        log_file: Optional path for a rotating DEBUG log

    Raises:
        DeployError: on an unknown level or an unwritable log file;
            a plain stderr sink is left in place so the error can be logged
    """
    logger.remove()

    try:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            logger.add(
                log_file,
                rotation="1 day",
                retention="7 days",
                format=FILE_FORMAT,
                level="DEBUG"
            )
    except (ValueError, OSError) as e:
        logger.remove()
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level="INFO")
        raise DeployError(f"Cannot configure logging: {e}", stage='config', cause=e)
