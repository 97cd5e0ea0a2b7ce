"""
Startup banner for envinfo.

Writes the build provenance and runtime facts of the current process to a
logger, one line per fact, framed by delimiter lines. The line order and
labels are stable so log-scraping tools can rely on them.
"""
import logging
import os
from typing import Iterable, List, Optional, Sequence

from envinfo.build import get_revision_information, get_toolchain_version, get_version
from envinfo.constants import (
    HIDDEN_CONTENT,
    INHERITED_LOGS_ENV,
    INSTALLATION_HOME_ENV,
    SENSITIVE_KEYS,
)
from envinfo.runtime import (
    ProcessMemory,
    RuntimeMemory,
    get_kerberos_user,
    get_kerberos_version_string,
    get_max_memory,
    get_os_user,
    get_python_path,
    get_runtime_version,
    get_startup_options_array,
)

DELIMITER = "-" * 80


def is_sensitive(argument: str, sensitive_keys: Iterable[str] = SENSITIVE_KEYS) -> bool:
    """Check whether an argument mentions any of the sensitive keys, ignoring case."""
    lowered = argument.lower()
    return any(key.lower() in lowered for key in sensitive_keys)


def _indented(values: Sequence[str]) -> List[str]:
    return [f"    {value}" for value in values]


def environment_info_lines(
    component_name: str,
    command_line_args: Optional[Sequence[str]] = None,
    config: Optional[dict] = None,
    memory: Optional[RuntimeMemory] = None,
) -> List[str]:
    """
    Build the banner lines for a component.

    Args:
        component_name: The component name to mention in the banner
        command_line_args: The arguments the component was started with
        config: envinfo configuration; only the ``banner`` and ``memory`` sections are used
        memory: Memory reading source; defaults to the current process

    Returns:
        Banner lines in output order

    Raises:
        VersionResolutionError: If the version resource is corrupt
        MemoryConfigurationError: If the memory ceiling cannot be determined
    """
    config = config or {}
    banner_config = config.get("banner") or {}
    sensitive_keys = banner_config.get("sensitive_keys") or SENSITIVE_KEYS
    hidden_content = banner_config.get("hidden_content") or HIDDEN_CONTENT

    if memory is None:
        memory = ProcessMemory((config.get("memory") or {}).get("max_bytes"))

    rev = get_revision_information()
    version = get_version()
    toolchain_version = get_toolchain_version()

    runtime_version = get_runtime_version()
    options = get_startup_options_array()

    installation_home = os.getenv(INSTALLATION_HOME_ENV)
    inherited_logs = os.getenv(INHERITED_LOGS_ENV)

    max_memory_mebibytes = get_max_memory(memory) >> 20

    lines = []
    if inherited_logs is not None:
        lines.append(DELIMITER)
        lines.append(" Preconfiguration: ")
        lines.append(inherited_logs)

    lines.append(DELIMITER)
    lines.append(
        f" Starting {component_name} (Version: {version}, Python: {toolchain_version}, "
        f"Rev:{rev.commit_id}, Date:{rev.commit_date})"
    )
    lines.append(f" OS current user: {get_os_user()}")
    lines.append(f" Current Kerberos user: {get_kerberos_user()}")
    lines.append(f" Python runtime: {runtime_version}")
    lines.append(f" Maximum memory size: {max_memory_mebibytes} MiBytes")
    lines.append(f" {INSTALLATION_HOME_ENV}: {installation_home if installation_home is not None else '(not set)'}")

    kerberos_version = get_kerberos_version_string()
    if kerberos_version is not None:
        lines.append(f" Kerberos (gssapi) version: {kerberos_version}")
    else:
        lines.append(" No Kerberos Dependency available")

    if not options:
        lines.append(" Interpreter Options: (none)")
    else:
        lines.append(" Interpreter Options:")
        lines.extend(_indented(options))

    if not command_line_args:
        lines.append(" Program Arguments: (none)")
    else:
        lines.append(" Program Arguments:")
        lines.extend(
            f"    {hidden_content} (sensitive information)" if is_sensitive(arg, sensitive_keys) else f"    {arg}"
            for arg in command_line_args
        )

    lines.append(f" Python path: {get_python_path()}")
    lines.append(DELIMITER)
    return lines


def log_environment_info(
    log: logging.Logger,
    component_name: str,
    command_line_args: Optional[Sequence[str]] = None,
    config: Optional[dict] = None,
    memory: Optional[RuntimeMemory] = None,
) -> None:
    """
    Logs information about the environment, like code revision, current user,
    Python version, and interpreter options.

    Nothing is computed unless the logger is enabled for INFO.

    Args:
        log: The logger to log the information to
        component_name: The component name to mention in the log
        command_line_args: The arguments accompanying the starting the component
        config: envinfo configuration
        memory: Memory reading source
    """
    if not log.isEnabledFor(logging.INFO):
        return

    for line in environment_info_lines(component_name, command_line_args, config, memory):
        log.info(line)
