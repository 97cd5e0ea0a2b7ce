"""
Report command implementations.

Print build metadata or runtime probe values as Rich tables.
"""
import sys
from typing import Optional

import typer

from envinfo.build import get_build_metadata
from envinfo.core import ConfigManager
from envinfo.rich_utils.ui_helpers import facts_table, get_console
from envinfo.runtime import (
    ProcessMemory,
    get_kerberos_user,
    get_kerberos_version_string,
    get_max_memory,
    get_open_file_handles_limit,
    get_os_user,
    get_runtime_version,
    get_size_of_free_memory,
    get_startup_options,
    get_temporary_file_directory,
)
from envinfo.utils.exceptions import EnvironmentInfoError


def version_command():
    """Show the build version and revision."""
    console = get_console()
    try:
        metadata = get_build_metadata()
    except EnvironmentInfoError as e:
        console.print(f"❌ {e}", style="bold red")
        sys.exit(2)

    console.print(facts_table("Build", {
        "Version": metadata.project_version,
        "Python toolchain": metadata.toolchain_version,
        "Commit": metadata.commit_id,
        "Commit (abbrev)": metadata.commit_id_abbrev,
        "Commit time": metadata.commit_time_display,
        "Build time": metadata.build_time_display,
    }))


def runtime_command(
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="Path to config YAML"),
):
    """Show the runtime probe values of this process."""
    console = get_console()
    config = ConfigManager().discover_and_load_config(config_path)
    memory = ProcessMemory((config.get("memory") or {}).get("max_bytes"))

    try:
        max_memory = get_max_memory(memory)
        free_memory = get_size_of_free_memory(memory)
    except EnvironmentInfoError as e:
        console.print(f"❌ {e}", style="bold red")
        sys.exit(2)

    console.print(facts_table("Runtime", {
        "OS user": get_os_user(),
        "Kerberos user": get_kerberos_user(),
        "Kerberos (gssapi) version": get_kerberos_version_string() or "(not available)",
        "Python runtime": get_runtime_version(),
        "Interpreter options": get_startup_options() or "(none)",
        "Maximum memory (MiB)": max_memory >> 20,
        "Free memory estimate (MiB)": free_memory >> 20,
        "Open file handles limit": get_open_file_handles_limit(),
        "Temporary directory": get_temporary_file_directory(),
    }))
