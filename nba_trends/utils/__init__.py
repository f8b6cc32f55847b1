"""Utility functions and configuration management."""

from nba_trends.utils.config import get_settings
from nba_trends.utils.logging import get_active_log_file, setup_logging

__all__ = ["get_active_log_file", "get_settings", "setup_logging"]
