"""
Main CLI application for envinfo.

Defines the Typer application structure and command routing,
following clean architecture principles with thin CLI layer.
"""
import typer

from envinfo.cli.commands.banner import banner_command
from envinfo.cli.commands.generate import generate_command
from envinfo.cli.commands.report import runtime_command, version_command


# Initialize Typer app
app = typer.Typer(help="envinfo - build provenance and runtime environment reporting")

# Register commands
app.command("banner", help="Log the startup banner for a component.")(banner_command)
app.command("version", help="Show the build version and revision.")(version_command)
app.command("runtime", help="Show runtime probe values for this process.")(runtime_command)
app.command("generate-version-file", help="Write the version properties file from git.")(generate_command)


# Add callback to make banner the default command when no subcommand is specified
@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """envinfo - build provenance and runtime environment reporting.

    Run 'envinfo banner' to log the startup banner.
    Run 'envinfo generate-version-file' while packaging a release.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(banner_command, args=None, component=None, config_path=None)
