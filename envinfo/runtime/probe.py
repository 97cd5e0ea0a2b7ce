"""
Runtime Probe for envinfo

Independent, side-effect-free queries against the interpreter and the
operating system. None of them raise: any failure is reported as a
documented sentinel value.
"""

import getpass
import importlib
import logging
import os
import platform
import sys
import tempfile
from importlib import metadata
from typing import List, Optional

from envinfo.constants import UNKNOWN
from envinfo.runtime.capability import ProbeStatus, probe_capability

logger = logging.getLogger(__name__)

KERBEROS_MODULE = "gssapi"
NO_KERBEROS_DEPENDENCY = "<no gssapi dependency found>"

# sys.flags attribute -> interpreter option; flags implied by -I are skipped when isolated
_FLAG_OPTIONS = [
    ("debug", "d"),
    ("inspect", "i"),
    ("isolated", "I"),
    ("ignore_environment", "E"),
    ("no_user_site", "s"),
    ("safe_path", "P"),
    ("no_site", "S"),
    ("dont_write_bytecode", "B"),
    ("bytes_warning", "b"),
    ("quiet", "q"),
    ("verbose", "v"),
    ("optimize", "O"),
]
_IMPLIED_BY_ISOLATED = {"ignore_environment", "no_user_site", "safe_path"}


def is_windows() -> bool:
    return platform.system() == "Windows"


def get_runtime_version() -> str:
    """
    Gets the version of the interpreter in the form "Name - Compiler - Spec/Version".

    Returns:
        The interpreter version, or UNKNOWN
    """
    try:
        language = f"{sys.version_info.major}.{sys.version_info.minor}"
        return (
            f"{platform.python_implementation()} - {platform.python_compiler()}"
            f" - {language}/{platform.python_version()}"
        )
    except Exception:
        return UNKNOWN


def _startup_options() -> List[str]:
    flags = sys.flags
    isolated = bool(getattr(flags, "isolated", 0))
    options = []

    for attribute, letter in _FLAG_OPTIONS:
        if isolated and attribute in _IMPLIED_BY_ISOLATED:
            continue
        level = int(getattr(flags, attribute, 0))
        if level > 0:
            options.append("-" + letter * level)

    for warning_option in sys.warnoptions:
        options.append(f"-W{warning_option}")

    for key, value in getattr(sys, "_xoptions", {}).items():
        options.append(f"-X{key}" if value is True else f"-X{key}={value}")

    return options


def get_startup_options() -> str:
    """
    Gets the interpreter options the process was started with, space separated.

    Returns:
        The options passed to the interpreter on startup, or an empty string
    """
    try:
        return " ".join(_startup_options())
    except Exception:
        return ""


def get_startup_options_array() -> List[str]:
    """
    Gets the interpreter options the process was started with.

    Returns:
        The options passed to the interpreter on startup, or an empty list
    """
    try:
        return _startup_options()
    except Exception:
        return []


def get_temporary_file_directory() -> str:
    """Gets the directory for temporary files."""
    return tempfile.gettempdir()


def _open_file_limit(resource) -> int:
    soft, _hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    if soft == resource.RLIM_INFINITY:
        return -1
    return int(soft)


def get_open_file_handles_limit() -> int:
    """
    Tries to retrieve the maximum number of open file handles.

    This only works on UNIX-based operating systems. If the limit cannot be
    determined, this method returns -1.
    """
    if is_windows():
        # RLIMIT_NOFILE is not available on Windows
        return -1

    result = probe_capability("resource", _open_file_limit)
    if result.available:
        return result.value

    if result.status is not ProbeStatus.MISSING:
        logger.warning("Unexpected error when accessing file handle limit", exc_info=result.error)
    return -1


def _kerberos_short_name(gssapi) -> Optional[str]:
    errors = importlib.import_module(f"{gssapi.__name__}.exceptions")
    try:
        credentials = gssapi.Credentials(usage="initiate")
    except errors.GSSError as e:
        # no ticket cache is the usual state outside a Kerberos session
        logger.debug(f"No Kerberos credentials available for the current user: {e}")
        return None
    principal = str(credentials.name)
    return principal.split("@", 1)[0].split("/", 1)[0]


def get_kerberos_user() -> str:
    """
    Gets the short name of the Kerberos principal of the current user.

    Returns:
        The short user name, a "no dependency" marker if gssapi is not
        installed, or UNKNOWN if there are no credentials or the lookup failed
    """
    result = probe_capability(KERBEROS_MODULE, _kerberos_short_name)
    if result.available:
        return result.value if result.value is not None else UNKNOWN

    if result.status is ProbeStatus.MISSING:
        return NO_KERBEROS_DEPENDENCY

    if result.status is ProbeStatus.INCOMPATIBLE:
        logger.debug(
            "Cannot determine user/group information using gssapi. "
            "gssapi not loaded or compatible",
            exc_info=result.error,
        )
    else:
        logger.warning("Error while accessing user/group information via gssapi.", exc_info=result.error)

    return UNKNOWN


def _kerberos_version(gssapi) -> str:
    return metadata.version(gssapi.__name__)


def get_kerberos_version_string() -> Optional[str]:
    """
    Gets the version of the installed gssapi distribution.

    Returns:
        The version string, or None if gssapi is unavailable
    """
    result = probe_capability(KERBEROS_MODULE, _kerberos_version)
    if result.available:
        return result.value

    if result.status is ProbeStatus.FAILED:
        logger.error("Cannot determine the gssapi version.", exc_info=result.error)
    return None


def get_os_user() -> str:
    """Gets the name of the operating system user running the process."""
    try:
        return getpass.getuser()
    except Exception as e:
        logger.debug(f"Cannot determine the operating system user: {e}")
        return UNKNOWN


def get_python_path() -> str:
    """Gets the module search path, joined with the platform path separator."""
    return os.pathsep.join(sys.path)
