"""Utility functions and configuration management."""

from courtbook.utils.config import get_settings
from courtbook.utils.logging import get_logger

__all__ = ["get_settings", "get_logger"]
