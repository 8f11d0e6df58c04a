"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from distrokit import __version__
from distrokit.cli.commands import config, info, maintenance, packages
from distrokit.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="distrokit",
    help="One package-management interface for Debian, Arch, Fedora and SUSE.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"distrokit version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """distrokit - query and clean installed packages on any major distro.

    Detects the distribution family and talks to apt, pacman, dnf or
    zypper for you.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.add_typer(info.app, name="info")
app.add_typer(packages.app, name="packages")
app.add_typer(config.app, name="config")
app.command()(maintenance.remove)
app.command()(maintenance.autoremove)
app.command()(maintenance.clean)
app.command()(maintenance.refresh)


if __name__ == "__main__":
    app()
