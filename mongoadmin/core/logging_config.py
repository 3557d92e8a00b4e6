import os
import logging
from logging.handlers import TimedRotatingFileHandler
from pythonjsonlogger.json import JsonFormatter

from mongoadmin.core.config import ENVIRONMENT, LOG_LEVEL, LOGS_FOLDER as LOG_DIR

LOGGER_NAME = "mongoadmin"

os.makedirs(LOG_DIR, exist_ok=True)

JSON_LOG_FILE = os.path.join(LOG_DIR, f"{LOGGER_NAME}_log.json")
TEXT_LOG_FILE = os.path.join(LOG_DIR, f"{LOGGER_NAME}_log.txt")

# Text and console records carry the routine (module) that emitted them
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(module)s - %(message)s"
JSON_LOG_FORMAT = "%(asctime)s %(levelname)s %(module)s %(message)s"


def _daily_handler(path, formatter):
    handler = TimedRotatingFileHandler(path, when="midnight", interval=1, backupCount=7)
    handler.suffix = "%Y-%m-%d"
    handler.setFormatter(formatter)
    return handler


logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(LOG_LEVEL)

logger.addHandler(_daily_handler(TEXT_LOG_FILE, logging.Formatter(LOG_FORMAT)))
logger.addHandler(_daily_handler(JSON_LOG_FILE, JsonFormatter(JSON_LOG_FORMAT)))
# Include stderr handler if not in production
if ENVIRONMENT != 'prd':
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)


def get_logger():
    """Returns the shared mongoadmin logger."""
    return logger
