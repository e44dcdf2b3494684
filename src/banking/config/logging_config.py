"""Logging configuration."""

import logging
import sys
from typing import Optional

from banking.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure application logging.

    Args:
        level: Level name overriding ``LOG_LEVEL`` (scripts pass their own).
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    app_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=app_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("banking").setLevel(app_level)

    # SQL statements only when DB_ECHO is on
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.db_echo else logging.WARNING
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
