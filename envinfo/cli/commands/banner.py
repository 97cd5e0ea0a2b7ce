"""
Banner command implementation.

Thin wrapper that loads configuration, installs logging and writes the
startup banner for the named component.
"""
import logging
import sys
from typing import List, Optional

import typer

from envinfo.banner import log_environment_info
from envinfo.core import ConfigManager, configure_logging
from envinfo.rich_utils.ui_helpers import get_console
from envinfo.utils.exceptions import EnvironmentInfoError


def banner_command(
    args: Optional[List[str]] = typer.Argument(None, help="Program arguments to report; sensitive ones are redacted"),
    component: Optional[str] = typer.Option(None, "-n", "--component", help="Component name shown in the banner"),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="Path to config YAML"),
):
    """Log the environment banner for a component."""
    console = get_console()
    config_manager = ConfigManager()

    config = config_manager.discover_and_load_config(config_path)
    config = config_manager.merge_config_and_args(config, component)
    configure_logging(config)

    component_name = config["banner"]["component_name"]
    try:
        log_environment_info(logging.getLogger(component_name), component_name, args or [], config)
    except EnvironmentInfoError as e:
        console.print(f"❌ {e}", style="bold red")
        sys.exit(2)
