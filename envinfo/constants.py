"""
Shared constants for envinfo.

This module contains sentinels and environment variable names used across the
build metadata resolver, the runtime probe and the banner.
"""

# Sentinel for any value that could not be determined
UNKNOWN = "<unknown>"

# Environment variables read by the banner
INSTALLATION_HOME_ENV = "PYTHONHOME"
INHERITED_LOGS_ENV = "ENVINFO_INHERITED_LOGS"

# Environment variable pointing at a user configuration file
CONFIG_PATH_ENV = "ENVINFO_CONFIG"

# Replacement text for sensitive program arguments
HIDDEN_CONTENT = "******"

# Argument substrings that mark a program argument as sensitive
SENSITIVE_KEYS = [
    "password",
    "secret",
    "fs.azure.account.key",
    "apikey",
    "api-key",
    "auth-params",
    "service-key",
    "token",
    "basic-auth",
    "jaas.config",
    "http-headers",
]
