"""Logging configuration for server events."""
import logging
from logging.handlers import RotatingFileHandler

from .config import LOG_FILE, LOG_LEVEL, LOG_TO_CONSOLE

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def configure_logging() -> logging.Logger:
    """Configure the server logger: rotating file, plus stderr when requested.

    Safe to call from every module; handlers are attached only once.
    """
    logger = logging.getLogger("felit_server")
    logger.setLevel(LOG_LEVEL)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if LOG_TO_CONSOLE:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)
    return logger
