import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(level: int = logging.INFO):
    """Configure the root logger for the application."""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Console handler, added only once
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    # httpx logs every request at INFO, ours are enough
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
