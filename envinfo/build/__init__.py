"""
Build provenance for envinfo.

Usage:
    from envinfo.build import get_version, get_revision_information

    rev = get_revision_information()
    print(get_version(), rev.commit_id, rev.commit_date)
"""

from .versions import (
    UNKNOWN,
    UNKNOWN_COMMIT_ID,
    UNKNOWN_COMMIT_ID_ABBREV,
    BuildMetadata,
    BuildMetadataHolder,
    RevisionInformation,
    get_build_metadata,
    get_build_time,
    get_build_time_string,
    get_git_commit_id,
    get_git_commit_id_abbrev,
    get_git_commit_time,
    get_git_commit_time_string,
    get_revision_information,
    get_toolchain_version,
    get_version,
    load_build_metadata,
)

__all__ = [
    "UNKNOWN",
    "UNKNOWN_COMMIT_ID",
    "UNKNOWN_COMMIT_ID_ABBREV",
    "BuildMetadata",
    "BuildMetadataHolder",
    "RevisionInformation",
    "get_build_metadata",
    "get_build_time",
    "get_build_time_string",
    "get_git_commit_id",
    "get_git_commit_id_abbrev",
    "get_git_commit_time",
    "get_git_commit_time_string",
    "get_revision_information",
    "get_toolchain_version",
    "get_version",
    "load_build_metadata",
]
