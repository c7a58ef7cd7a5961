"""
Root logger setup.

Single stdout handler with timestamped lines; HTTP and SQL client loggers
are capped at WARNING so embedding and query traffic stays readable.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
QUIET_LOGGERS = ("httpx", "openai", "urllib3", "botocore", "sqlalchemy.engine")


def configure_logging(level: str = "INFO") -> None:
    """
    Replace root handlers with one stdout handler at the given level.

    Args:
        level: Level name, case-insensitive ("info", "DEBUG", ...)
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.setLevel(level.upper())
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
