import os
import sys
from typing import Dict

from rich.console import Console
from rich.table import Table


def is_ci_environment():
    return (
        os.getenv('CI') is not None or
        os.getenv('GITHUB_ACTIONS') is not None or
        not sys.stdout.isatty()
    )


def get_console() -> Console:
    """Detect environment and create console."""
    if is_ci_environment():
        # CI/automated environment - no colors, no interactive elements
        return Console(force_terminal=False, no_color=True)
    # Interactive terminal - full Rich capabilities
    return Console()


def facts_table(title: str, facts: Dict[str, object]) -> Table:
    """Render a two-column table of labelled facts."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Property", style="white", no_wrap=True)
    table.add_column("Value", style="white")
    for label, value in facts.items():
        table.add_row(label, str(value))
    return table
