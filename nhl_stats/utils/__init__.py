"""Configuration and logging helpers."""

from nhl_stats.utils.config import get_settings
from nhl_stats.utils.logging import get_logger

__all__ = ["get_settings", "get_logger"]
