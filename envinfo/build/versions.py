"""
Build Metadata Resolution for envinfo

This module resolves the version and revision facts embedded into the
package at build time. The facts live in a generated properties resource
that ships inside the ``envinfo`` package; it is read at most once per
process and exposed as an immutable ``BuildMetadata`` value.

Failure semantics are deliberately asymmetric:
- resource absent or unreadable: every field keeps its documented default
- resource present but a timestamp is malformed: ``VersionResolutionError``

Classes:
    BuildMetadata: Immutable build provenance value
    RevisionInformation: Abbreviated commit id and commit date pair
    BuildMetadataHolder: Thread-safe initialize-once holder
"""

import logging
import re
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from importlib import resources
from typing import Callable, Dict, Mapping, Optional
from zoneinfo import ZoneInfo

from envinfo.build.properties import parse_properties
from envinfo.constants import UNKNOWN
from envinfo.utils.exceptions import VersionResolutionError

logger = logging.getLogger(__name__)

UNKNOWN_COMMIT_ID = "DecafC0ffeeD0d0F00d"
UNKNOWN_COMMIT_ID_ABBREV = "DeadD0d0"

PROPERTIES_FILE = ".envinfo.version.properties"
PLACEHOLDER_MARKER = "$"
# Properties files are ISO-8859-1; other characters are written as \uXXXX escapes
PROPERTIES_ENCODING = "latin-1"

DEFAULT_TIME_INSTANT = datetime(1970, 1, 1, tzinfo=timezone.utc)
DEFAULT_TIME_STRING = "1970-01-01T00:00:00+0000"

# Format written by the version file generator: yyyy-MM-dd'T'HH:mm:ssZ
GIT_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_GIT_DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{4}$")

# Display strings use the timezone the project originated in.
DISPLAY_TIMEZONE = "Europe/Berlin"

FAIL_MESSAGE = (
    f"The file {PROPERTIES_FILE} has not been generated correctly. "
    "You MUST run 'envinfo generate-version-file' before packaging envinfo."
)

PROJECT_VERSION_KEY = "project.version"
TOOLCHAIN_VERSION_KEY = "toolchain.version"
COMMIT_ID_KEY = "git.commit.id"
COMMIT_ID_ABBREV_KEY = "git.commit.id.abbrev"
COMMIT_TIME_KEY = "git.commit.time"
BUILD_TIME_KEY = "git.build.time"


@dataclass(frozen=True)
class RevisionInformation:
    """Source code revision of the running build."""
    commit_id: str
    commit_date: str


@dataclass(frozen=True)
class BuildMetadata:
    """Version and revision facts embedded at build time."""
    project_version: str = UNKNOWN
    toolchain_version: str = UNKNOWN
    build_time: datetime = DEFAULT_TIME_INSTANT
    build_time_display: str = DEFAULT_TIME_STRING
    commit_id: str = UNKNOWN_COMMIT_ID
    commit_id_abbrev: str = UNKNOWN_COMMIT_ID_ABBREV
    commit_time: datetime = DEFAULT_TIME_INSTANT
    commit_time_display: str = DEFAULT_TIME_STRING

    @property
    def revision(self) -> RevisionInformation:
        """Build a fresh revision pair from the abbreviated commit id and date."""
        return RevisionInformation(self.commit_id_abbrev, self.commit_time_display)

    @classmethod
    def from_properties(
        cls,
        properties: Mapping[str, str],
        display_timezone: str = DISPLAY_TIMEZONE,
    ) -> "BuildMetadata":
        """
        Build metadata from already parsed properties.

        Args:
            properties: Key/value pairs read from the version resource
            display_timezone: IANA zone used for the display strings

        Returns:
            BuildMetadata with placeholders and missing keys defaulted

        Raises:
            VersionResolutionError: If either timestamp is malformed
        """
        zone = ZoneInfo(display_timezone)

        try:
            commit_time = parse_git_datetime(
                _get_property(properties, COMMIT_TIME_KEY, DEFAULT_TIME_STRING)
            )
        except ValueError as e:
            raise _resolution_failure(COMMIT_TIME_KEY, e) from e

        try:
            build_time = parse_git_datetime(
                _get_property(properties, BUILD_TIME_KEY, DEFAULT_TIME_STRING)
            )
        except ValueError as e:
            raise _resolution_failure(BUILD_TIME_KEY, e) from e

        return cls(
            project_version=_get_property(properties, PROJECT_VERSION_KEY, UNKNOWN),
            toolchain_version=_get_property(properties, TOOLCHAIN_VERSION_KEY, UNKNOWN),
            build_time=build_time,
            build_time_display=build_time.astimezone(zone).isoformat(),
            commit_id=_get_property(properties, COMMIT_ID_KEY, UNKNOWN_COMMIT_ID),
            commit_id_abbrev=_get_property(
                properties, COMMIT_ID_ABBREV_KEY, UNKNOWN_COMMIT_ID_ABBREV
            ),
            commit_time=commit_time,
            commit_time_display=commit_time.astimezone(zone).isoformat(),
        )


def _get_property(properties: Mapping[str, str], key: str, default: str) -> str:
    """Return the property value unless it is missing or an unexpanded placeholder."""
    value = properties.get(key)
    if not value or value.startswith(PLACEHOLDER_MARKER):
        return default
    return value


def _resolution_failure(key: str, error: ValueError) -> VersionResolutionError:
    logger.error(f"{FAIL_MESSAGE} : {error}")
    return VersionResolutionError(
        FAIL_MESSAGE,
        resource=PROPERTIES_FILE,
        key=key,
        original_exception=error,
    )


def parse_git_datetime(value: str) -> datetime:
    """
    Parse a ``yyyy-MM-dd'T'HH:mm:ssZ`` timestamp into a UTC datetime.

    The offset must be given as four digits (``+0200``); ``Z`` and
    ``+02:00`` are rejected.

    Raises:
        ValueError: If the value does not match the pattern
    """
    if not _GIT_DATETIME_PATTERN.match(value):
        raise ValueError(f"Text '{value}' does not match pattern yyyy-MM-dd'T'HH:mm:ssZ")
    return datetime.strptime(value, GIT_DATETIME_FORMAT).astimezone(timezone.utc)


def format_git_datetime(value: datetime) -> str:
    """Format an aware datetime with the pattern the resolver parses."""
    return value.strftime(GIT_DATETIME_FORMAT)


def default_resource():
    """Return the packaged version resource as a traversable."""
    return resources.files("envinfo").joinpath(PROPERTIES_FILE)


def load_build_metadata(resource=None, display_timezone: str = DISPLAY_TIMEZONE) -> BuildMetadata:
    """
    Read the version resource and resolve it into ``BuildMetadata``.

    Args:
        resource: Path-like or traversable pointing at the properties file;
            defaults to the resource packaged with envinfo
        display_timezone: IANA zone used for the display strings

    Returns:
        Resolved metadata, or full defaults if the resource is absent or unreadable

    Raises:
        VersionResolutionError: If the resource holds a malformed timestamp
    """
    if resource is None:
        resource = default_resource()

    try:
        if not resource.is_file():
            logger.debug(f"Version property file {PROPERTIES_FILE} not found, using defaults")
            return BuildMetadata()

        with resource.open("r", encoding=PROPERTIES_ENCODING) as handle:
            properties: Dict[str, str] = parse_properties(handle)
    except OSError as e:
        logger.info(f"Cannot determine code revision: Unable to read version property file.: {e}")
        return BuildMetadata()

    return BuildMetadata.from_properties(properties, display_timezone)


class BuildMetadataHolder:
    """
    Initialize-once holder for the process-wide ``BuildMetadata``.

    The loader runs at most once, under a lock, the first time ``get`` is
    called. A failed resolution is remembered and re-raised on every later
    call without touching the resource again.
    """

    def __init__(self, loader: Optional[Callable[[], BuildMetadata]] = None):
        self._loader = loader or load_build_metadata
        self._lock = threading.Lock()
        self._value: Optional[BuildMetadata] = None
        self._error: Optional[Exception] = None
        self._error_traceback = None

    def get(self) -> BuildMetadata:
        value = self._value
        if value is not None:
            return value

        with self._lock:
            if self._value is None:
                if self._error is not None:
                    # restore the original traceback so repeated raises do not extend it
                    raise self._error.with_traceback(self._error_traceback)
                try:
                    self._value = self._loader()
                except Exception as e:
                    self._error = e
                    self._error_traceback = e.__traceback__
                    raise
            return self._value

    @property
    def resolved(self) -> bool:
        """Whether resolution has completed successfully."""
        return self._value is not None


_VERSIONS = BuildMetadataHolder()


def get_build_metadata() -> BuildMetadata:
    """Return the process-wide build metadata, resolving it on first use."""
    return _VERSIONS.get()


def get_version() -> str:
    """
    Returns the version of the code as string.

    Returns:
        The project version string
    """
    return get_build_metadata().project_version


def get_toolchain_version() -> str:
    """
    Returns the Python version the build targeted.

    Returns:
        The toolchain version string
    """
    return get_build_metadata().toolchain_version


def get_build_time() -> datetime:
    """The instant this version of the software was built."""
    return get_build_metadata().build_time


def get_build_time_string() -> str:
    """The build instant rendered in the Europe/Berlin timezone."""
    return get_build_metadata().build_time_display


def get_git_commit_id() -> str:
    """The last known commit id of this version of the software."""
    return get_build_metadata().commit_id


def get_git_commit_id_abbrev() -> str:
    """The last known abbreviated commit id of this version of the software."""
    return get_build_metadata().commit_id_abbrev


def get_git_commit_time() -> datetime:
    """The instant of the last commit of this code."""
    return get_build_metadata().commit_time


def get_git_commit_time_string() -> str:
    """The last commit instant rendered in the Europe/Berlin timezone."""
    return get_build_metadata().commit_time_display


def get_revision_information() -> RevisionInformation:
    """
    Returns the code revision (abbreviated commit and commit date).

    Returns:
        A new RevisionInformation for every call
    """
    return RevisionInformation(get_git_commit_id_abbrev(), get_git_commit_time_string())
