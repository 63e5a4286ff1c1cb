"""Logging setup for scripts and embedding applications."""

import logging
from typing import Optional

from campaign_parser.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging.

    Args:
        level: Log level name. Defaults to the configured ``log_level``.
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
