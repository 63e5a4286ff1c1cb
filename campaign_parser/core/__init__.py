"""Core configuration and utilities."""

from campaign_parser.core.config import settings
from campaign_parser.core.logging import configure_logging

__all__ = ["settings", "configure_logging"]
