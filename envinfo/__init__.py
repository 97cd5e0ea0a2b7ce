"""
envinfo - build provenance and runtime environment reporting

This package reports static and dynamic facts about the process hosting a
data-processing engine and renders them as a startup banner:
- Build provenance: version, commit and timestamps resolved once per process
- Runtime probe: memory sizing, interpreter identity, startup options,
  file handle limits and optional Kerberos identity
- Banner: the fixed-order log lines consumed by log-scraping tools

Usage:
    import logging
    import sys

    from envinfo import log_environment_info

    log_environment_info(logging.getLogger("worker"), "TaskRunner", sys.argv[1:])
"""

from .banner import log_environment_info
from .build import (
    UNKNOWN_COMMIT_ID,
    UNKNOWN_COMMIT_ID_ABBREV,
    BuildMetadata,
    RevisionInformation,
    get_revision_information,
    get_version,
)
from .constants import UNKNOWN
from .utils.exceptions import (
    EnvironmentInfoError,
    MemoryConfigurationError,
    VersionResolutionError,
)

__all__ = [
    "log_environment_info",
    "UNKNOWN",
    "UNKNOWN_COMMIT_ID",
    "UNKNOWN_COMMIT_ID_ABBREV",
    "BuildMetadata",
    "RevisionInformation",
    "get_revision_information",
    "get_version",
    "EnvironmentInfoError",
    "MemoryConfigurationError",
    "VersionResolutionError",
]
