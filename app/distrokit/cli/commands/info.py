"""Info command implementation.

Shows the detected distribution, adapter, paths and feature matrix.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from distrokit.cli.types import OutputFormat, get_context
from distrokit.utils.formatting import console, print_warning

app = typer.Typer(
    help="Show detected distribution and package manager.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_info(
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show what distrokit detected on this system."""
    ctx = get_context()

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(ctx.to_dict()))
        return

    distro = ctx.distro
    version = f" {distro.version_id}" if distro.version_id else ""
    console.print(f"[bold_header]{distro.name}{version}[/] [muted]({distro.id})[/]")
    console.print(f"Family: [info]{ctx.family.display_name}[/]")
    console.print(f"Package manager: [info]{ctx.package_manager.name}[/]")
    if ctx.package_manager.simulation:
        console.print("[warning]Simulation mode: no native tools are run[/]")
    if not distro.is_supported:
        print_warning("This distribution release is not officially supported.")

    paths = Table(title="Paths", header_style="bold_header", border_style="border")
    paths.add_column("Name")
    paths.add_column("Location", style="muted")
    for name, location in ctx.paths.to_dict().items():
        paths.add_row(name, location or "-")
    console.print(paths)

    features = Table(title="Features", header_style="bold_header", border_style="border")
    features.add_column("Feature")
    features.add_column("Available", justify="center")
    for name, available in ctx.features.to_dict().items():
        features.add_row(name, "[success]yes[/]" if available else "[muted]no[/]")
    console.print(features)
