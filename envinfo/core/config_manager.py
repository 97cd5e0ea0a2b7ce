"""
Configuration management for envinfo.

Handles loading, merging, and discovery of configuration files following
SOLID principles with single responsibility for config operations.
"""
import importlib.resources as importlib_resources
import os
from typing import Optional

import yaml

from envinfo.constants import CONFIG_PATH_ENV

USER_CONFIG_FILE = "envinfo.config.yaml"


class ConfigManager:
    """Manages envinfo configuration loading and merging operations."""

    def load_config(self, path: str) -> dict:
        """Load configuration from YAML file."""
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}

    def deep_merge(self, default: dict, user: dict) -> dict:
        """Deep merge user config into default config."""
        result = default.copy()
        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self.deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def load_package_default_config(self) -> dict:
        """Load default config from package."""
        import envinfo.config
        default_config_path = importlib_resources.files(envinfo.config) / "default.yaml"
        with default_config_path.open("r") as f:
            return yaml.safe_load(f)

    def load_and_merge_config(self, user_config_path: str) -> dict:
        """Load user config and merge with package default."""
        default_config = self.load_package_default_config()
        user_config = self.load_config(user_config_path)
        return self.deep_merge(default_config, user_config)

    def discover_and_load_config(self, config_arg: Optional[str]) -> dict:
        """Discover config file with priority order."""

        # Priority 1: --config argument
        if config_arg:
            if os.path.exists(config_arg):
                return self.load_and_merge_config(config_arg)
            else:
                raise FileNotFoundError(f"Config file not found: {config_arg}")

        # Priority 2: ENVINFO_CONFIG environment variable
        env_config = os.getenv(CONFIG_PATH_ENV)
        if env_config:
            if os.path.exists(env_config):
                return self.load_and_merge_config(env_config)
            else:
                raise FileNotFoundError(f"Config file not found: {env_config} (from {CONFIG_PATH_ENV})")

        # Priority 3: envinfo.config.yaml in current directory
        if os.path.exists(USER_CONFIG_FILE):
            return self.load_and_merge_config(USER_CONFIG_FILE)

        # Priority 4: Package default config
        return self.load_package_default_config()

    def merge_config_and_args(self, config: dict, component_name: Optional[str]) -> dict:
        """Merge configuration with CLI arguments."""
        if component_name is not None:
            config.setdefault("banner", {})["component_name"] = component_name

        return config
