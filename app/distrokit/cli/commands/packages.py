"""Package listing commands.

Lists, searches and counts installed packages through the detected
package manager.
"""

import json
from typing import Annotated

import typer

from distrokit.cli.types import OutputFormat, get_context, run_operation
from distrokit.core.categorizer import CATEGORIES
from distrokit.models.package import PackageRecord
from distrokit.utils.formatting import (
    console,
    create_package_table,
    format_package_row,
    format_size,
    print_error,
    print_info,
)

app = typer.Typer(
    help="List and search installed packages.",
    no_args_is_help=True,
)


def _print_packages(
    packages: list[PackageRecord],
    title: str,
    output_format: OutputFormat,
    limit: int | None,
) -> None:
    """Render packages as a table or JSON."""
    shown = packages[:limit] if limit else packages

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([pkg.to_dict() for pkg in shown]))
        return

    if not shown:
        print_info("No packages found.")
        return

    table = create_package_table(title)
    for pkg in shown:
        table.add_row(*format_package_row(pkg))
    console.print(table)

    if limit and len(packages) > limit:
        console.print(f"[muted]Showing {limit} of {len(packages)} packages[/]")


@app.command("list")
def list_packages(
    auto_only: Annotated[
        bool,
        typer.Option("--auto-only", "-a", help="Only show packages installed as dependencies."),
    ] = False,
    manual_only: Annotated[
        bool,
        typer.Option("--manual-only", "-m", help="Only show explicitly installed packages."),
    ] = False,
    category: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Only show one category (e.g. Development)."),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Limit number of packages to display."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: table or json.", case_sensitive=False),
    ] = OutputFormat.TABLE,
) -> None:
    """List installed packages.

    Examples:
        distrokit packages list
        distrokit packages list --manual-only --category Development
        distrokit packages list --format json --limit 50
    """
    if auto_only and manual_only:
        print_error("--auto-only and --manual-only are mutually exclusive.")
        raise typer.Exit(code=1)

    if category is not None:
        matches = [c for c in CATEGORIES if c.lower() == category.lower()]
        if not matches:
            print_error(f"Unknown category '{category}'. Choose from: {', '.join(CATEGORIES)}")
            raise typer.Exit(code=1)
        category = matches[0]

    ctx = get_context()
    packages = run_operation(ctx.package_manager.get_installed_packages())

    if auto_only:
        packages = [p for p in packages if p.is_auto]
    elif manual_only:
        packages = [p for p in packages if not p.is_auto]
    if category is not None:
        packages = [p for p in packages if p.category == category]

    title = f"Installed Packages ({ctx.package_manager.name.upper()})"
    _print_packages(packages, title, output_format, limit)


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Text to look for in names and descriptions.")],
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Limit number of packages to display."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: table or json.", case_sensitive=False),
    ] = OutputFormat.TABLE,
) -> None:
    """Search installed packages by name or description."""
    ctx = get_context()
    packages = run_operation(ctx.package_manager.search_packages(query))
    _print_packages(packages, f"Packages matching '{query}'", output_format, limit)


@app.command()
def stats(
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: table or json.", case_sensitive=False),
    ] = OutputFormat.TABLE,
) -> None:
    """Show package counts and total installed size."""
    ctx = get_context()
    result = run_operation(ctx.package_manager.get_stats())

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(result.to_dict()))
        return

    manual = result.total_count - result.auto_count
    print_info(f"Total packages: {result.total_count}")
    console.print(f"  [package_manual]Manual:[/] {manual}")
    console.print(f"  [package_auto]Auto:[/] {result.auto_count}")
    console.print(f"  Installed size: {format_size(result.total_size_bytes)}")
