"""Logging setup shared by the API process and migrations."""

import logging
import sys

from app.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging() -> logging.Logger:
    """Configure the root logger once and return the application logger."""
    global _configured
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root = logging.getLogger()
        root.handlers = [handler]
        root.setLevel(level)
        # SQL echo is controlled by SQL_DEBUG on the engine
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)
        _configured = True
    logger = logging.getLogger("app")
    logger.setLevel(level)
    return logger
