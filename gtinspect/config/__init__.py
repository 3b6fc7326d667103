"""
Configuration management for gtinspect.
"""

from gtinspect.config.logging import configure_logging
from gtinspect.config.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
