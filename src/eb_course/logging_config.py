"""Logging setup shared by the web app and the CLI."""
import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# boto's wire-level loggers drown out the application at DEBUG
NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "s3transfer")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the process.

    Args:
        level: Logging level name; defaults to the ``log_level`` setting.
    """
    if level is None:
        from eb_course.settings import get_settings
        level = get_settings().log_level

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
