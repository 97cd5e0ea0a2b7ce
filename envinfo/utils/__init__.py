"""
Utility modules for envinfo.

This package contains shared utility classes used throughout the envinfo
codebase, currently the exception hierarchy for fatal startup failures.
"""

from envinfo.utils.exceptions import (
    EnvironmentInfoError,
    MemoryConfigurationError,
    VersionResolutionError,
)

__all__ = [
    "EnvironmentInfoError",
    "VersionResolutionError",
    "MemoryConfigurationError",
]
