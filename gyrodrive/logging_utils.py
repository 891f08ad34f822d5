# logging_utils.py
"""
Logging setup using Python's built-in logging with rotation.
"""
import logging
from logging.handlers import RotatingFileHandler

from gyrodrive import config

_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        fmt = logging.Formatter(_FORMAT)
        handler = RotatingFileHandler(
            config.LOG_FILE,
            maxBytes=config.LOG_MAX_BYTES,
            backupCount=config.LOG_BACKUP_COUNT,
            delay=True
        )
        handler.setFormatter(fmt)
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        console.setLevel(logging.INFO)
        logger.setLevel(config.LOG_LEVEL)
        logger.addHandler(handler)
        logger.addHandler(console)
    return logger
