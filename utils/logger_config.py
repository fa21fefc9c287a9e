import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def setup_logging():
    """Configures the root logger once, level from LOG_LEVEL (default INFO)."""
    logger = logging.getLogger()
    if logger.hasHandlers():
        logger.handlers.clear()
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level, logging.INFO))
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%m-%d-%Y %H:%M:%S"))
    logger.addHandler(handler)
    # discord.py logs every gateway event at INFO
    logging.getLogger("discord").setLevel(logging.WARNING)
    return logger


logger = setup_logging()
