"""
Runtime probe for envinfo.

Stateless queries for memory sizing, interpreter identity, startup options,
file handle limits and optional Kerberos identity.
"""

from .capability import ProbeResult, ProbeStatus, probe_capability
from .memory import (
    ProcessMemory,
    RuntimeMemory,
    get_max_memory,
    get_size_of_free_memory,
    get_size_of_free_memory_with_defrag,
)
from .probe import (
    NO_KERBEROS_DEPENDENCY,
    get_kerberos_user,
    get_kerberos_version_string,
    get_open_file_handles_limit,
    get_os_user,
    get_python_path,
    get_runtime_version,
    get_startup_options,
    get_startup_options_array,
    get_temporary_file_directory,
)

__all__ = [
    "ProbeResult",
    "ProbeStatus",
    "probe_capability",
    "ProcessMemory",
    "RuntimeMemory",
    "get_max_memory",
    "get_size_of_free_memory",
    "get_size_of_free_memory_with_defrag",
    "NO_KERBEROS_DEPENDENCY",
    "get_kerberos_user",
    "get_kerberos_version_string",
    "get_open_file_handles_limit",
    "get_os_user",
    "get_python_path",
    "get_runtime_version",
    "get_startup_options",
    "get_startup_options_array",
    "get_temporary_file_directory",
]
