"""Stdlib logging setup for third-party libraries.

Application code logs through Logfire. uvicorn, SQLAlchemy and aiosmtplib
log through the standard library, so their output is routed and leveled
here.
"""

import logging
import sys

from ubos.config import Settings

# Libraries that are chatty at INFO
NOISY_LOGGERS = ("aiosmtplib", "sqlalchemy.engine", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the current environment.

    Args:
        settings: Application settings
    """
    if settings.debug:
        level = logging.DEBUG
    elif settings.environment == "production":
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # SQL echo in debug mode goes through sqlalchemy.engine, keep it visible
    for name in NOISY_LOGGERS:
        if not (settings.debug and name == "sqlalchemy.engine"):
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
