"""
Core services for envinfo: configuration discovery and logging setup.
"""

from envinfo.core.config_manager import ConfigManager
from envinfo.core.logging_config import configure_logging

__all__ = ["ConfigManager", "configure_logging"]
