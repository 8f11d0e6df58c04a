"""Settings commands.

Shows the effective settings and writes a default settings file.
"""

import json
from typing import Annotated

import typer

from distrokit.core.config import Settings, load_settings, save_settings
from distrokit.core.paths import get_config_path
from distrokit.errors import ConfigError
from distrokit.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialise distrokit settings.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show effective settings (file plus environment overrides)."""
    try:
        settings = load_settings()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    config_path = get_config_path()
    source = str(config_path) if config_path.exists() else "defaults"
    print_info(f"Settings from {source}")
    console.print_json(json.dumps(settings.model_dump(mode="json")))


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_error(f"Settings file already exists: {config_path} (use --force)")
        raise typer.Exit(code=1)

    try:
        path = save_settings(Settings(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Settings written to {path}")
