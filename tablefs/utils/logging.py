"""
Logging setup for tablefs
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from tablefs.settings import Settings, get_settings


def setup_logging(app_settings: Optional[Settings] = None):
    """Configure the root logger for the whole application"""
    app_settings = app_settings or get_settings()
    level = getattr(logging, app_settings.LOG_LEVEL.upper())

    logger = logging.getLogger()
    logger.setLevel(level)

    # Drop handlers installed by earlier calls
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    if app_settings.ENVIRONMENT == 'production':
        # JSON lines for log shipping
        formatter = jsonlogger.JsonFormatter(
            '%(asctime)s %(name)s %(levelname)s %(message)s',
            timestamp=True
        )
    else:
        formatter = logging.Formatter(
            app_settings.LOG_FORMAT,
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Quieter third-party loggers
    logging.getLogger('psycopg2').setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module"""
    return logging.getLogger(name)
