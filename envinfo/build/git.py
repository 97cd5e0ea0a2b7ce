"""
Version File Generation for envinfo

This module produces the ``.envinfo.version.properties`` resource that the
build metadata resolver reads at runtime. Commit details are taken from the
``git`` executable of the working tree being packaged; anything that cannot
be determined is written as an unexpanded ``${...}`` placeholder so the
resolver falls back to its documented defaults.

Classes:
    GitRevisionDetector: Git commit information for the version file
    VersionFileGenerator: Writes the properties resource
"""

import logging
import os
import subprocess
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from envinfo.build.versions import (
    BUILD_TIME_KEY,
    COMMIT_ID_ABBREV_KEY,
    COMMIT_ID_KEY,
    COMMIT_TIME_KEY,
    PROJECT_VERSION_KEY,
    PROPERTIES_ENCODING,
    PROPERTIES_FILE,
    TOOLCHAIN_VERSION_KEY,
    format_git_datetime,
)

logger = logging.getLogger(__name__)

ABBREV_LENGTH = 8

KEY_ORDER = [
    PROJECT_VERSION_KEY,
    TOOLCHAIN_VERSION_KEY,
    COMMIT_ID_KEY,
    COMMIT_ID_ABBREV_KEY,
    COMMIT_TIME_KEY,
    BUILD_TIME_KEY,
]


def placeholder(key: str) -> str:
    """Return the unexpanded placeholder token for a property key."""
    return "${" + key + "}"


def escape_value(value: str) -> str:
    """Escape backslashes and characters outside ISO-8859-1 as \\uXXXX."""
    escaped = []
    for char in value.replace("\\", "\\\\"):
        if ord(char) <= 0xFF:
            escaped.append(char)
            continue
        units = char.encode("utf-16-be")
        for i in range(0, len(units), 2):
            escaped.append(f"\\u{int.from_bytes(units[i:i + 2], 'big'):04x}")
    return "".join(escaped)


class GitRevisionDetector:
    """Git commit information detection."""

    def __init__(self, working_directory: Optional[str] = None):
        self.working_directory = working_directory or os.getcwd()

    def _run(self, args: List[str], timeout: int = 5) -> Optional[str]:
        """Run a git command and return its stripped output, or None on failure."""
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=self.working_directory,
                capture_output=True,
                text=True,
                timeout=timeout
            )
        except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as e:
            logger.debug(f"git {' '.join(args)} failed: {e}")
            return None

        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def is_available(self) -> bool:
        """Check if Git is available and we're in a Git repository."""
        return self._run(["rev-parse", "--git-dir"], timeout=10) is not None

    def get_commit_id(self) -> Optional[str]:
        """Get current commit SHA."""
        return self._run(["rev-parse", "HEAD"])

    def get_commit_time(self) -> Optional[str]:
        """Get the committer date of HEAD as yyyy-MM-dd'T'HH:mm:ssZ."""
        return self._run(["log", "-1", "--format=%cd", "--date=format:%Y-%m-%dT%H:%M:%S%z"])

    def detect(self) -> Dict[str, str]:
        """Detect commit properties, leaving placeholders for anything unavailable."""
        properties = {
            COMMIT_ID_KEY: placeholder(COMMIT_ID_KEY),
            COMMIT_ID_ABBREV_KEY: placeholder(COMMIT_ID_ABBREV_KEY),
            COMMIT_TIME_KEY: placeholder(COMMIT_TIME_KEY),
        }

        if not self.is_available():
            logger.warning("Git not available or not in a Git repository, writing placeholders")
            return properties

        commit_id = self.get_commit_id()
        if commit_id:
            properties[COMMIT_ID_KEY] = commit_id
            properties[COMMIT_ID_ABBREV_KEY] = commit_id[:ABBREV_LENGTH]

        commit_time = self.get_commit_time()
        if commit_time:
            properties[COMMIT_TIME_KEY] = commit_time

        return properties


class VersionFileGenerator:
    """Writes the version properties resource for a build."""

    def __init__(
        self,
        detector: Optional[GitRevisionDetector] = None,
        project_version: Optional[str] = None,
        toolchain_version: Optional[str] = None,
    ):
        self.detector = detector or GitRevisionDetector()
        self.project_version = project_version
        self.toolchain_version = toolchain_version or f"{sys.version_info.major}.{sys.version_info.minor}"

    def collect(self, build_time: Optional[datetime] = None) -> Dict[str, str]:
        """Collect every property the resolver expects."""
        build_time = build_time or datetime.now(timezone.utc)

        properties = {
            PROJECT_VERSION_KEY: self.project_version or placeholder(PROJECT_VERSION_KEY),
            TOOLCHAIN_VERSION_KEY: self.toolchain_version,
            BUILD_TIME_KEY: format_git_datetime(build_time),
        }
        properties.update(self.detector.detect())
        return properties

    def render(self, properties: Dict[str, str]) -> str:
        """Render properties in resolver key order."""
        lines = ["# Generated by envinfo generate-version-file"]
        for key in KEY_ORDER:
            lines.append(f"{key}={escape_value(properties[key])}")
        return "\n".join(lines) + "\n"

    def write(self, output: Optional[Path] = None, build_time: Optional[datetime] = None) -> Path:
        """
        Write the version file.

        Args:
            output: Target path; defaults to the resource inside the envinfo package
            build_time: Build instant to record; defaults to now

        Returns:
            Path of the written file
        """
        if output is None:
            output = Path(__file__).resolve().parent.parent / PROPERTIES_FILE

        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(self.render(self.collect(build_time)), encoding=PROPERTIES_ENCODING)
        logger.info(f"Wrote version file {output}")
        return output
