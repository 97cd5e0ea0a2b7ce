"""
Version file generation command.

Writes the properties resource read by the build metadata resolver.
"""
from pathlib import Path
from typing import Optional

import typer

from envinfo.build.git import GitRevisionDetector, VersionFileGenerator
from envinfo.rich_utils.ui_helpers import get_console


def generate_command(
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Target file; defaults to the packaged resource"),
    project_version: Optional[str] = typer.Option(None, "--project-version", help="Version to record"),
    repository: Optional[str] = typer.Option(None, "--repository", help="Git working tree to read the revision from"),
):
    """Generate the version properties file from git."""
    console = get_console()
    generator = VersionFileGenerator(
        detector=GitRevisionDetector(repository),
        project_version=project_version,
    )
    path = generator.write(output)
    console.print(f"✅ Version file written to {path}", style="green")
