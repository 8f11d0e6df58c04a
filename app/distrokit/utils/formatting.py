"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from distrokit.models.package import PackageActionResult, PackageRecord

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "#f53263",
        "info": "#0ec1c8",
        "package_manual": "bold #69B9A1",
        "package_auto": "#226666",
    }
)


def _detect_color_system() -> str | None:
    """Return "truecolor" for interactive terminals, None to let Rich decide."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def create_package_table(title: str = "Installed Packages") -> Table:
    """Create a pre-configured table for displaying packages.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for package display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    # Status column: icon only, no header text
    table.add_column("", width=2, justify="center")
    table.add_column("Package", no_wrap=True)
    table.add_column("Version", style="muted")
    table.add_column("Size", style="info", justify="right")
    table.add_column("Category", style="muted")
    table.add_column("Description", style="text", overflow="ellipsis")
    return table


def format_package_row(pkg: PackageRecord) -> tuple[str, str, str, str, str, str]:
    """Format a package as a table row.

    Explicit packages get a filled circle, dependencies an empty one.

    Args:
        pkg: The package to format.

    Returns:
        Tuple of (icon, name, version, size, category, description).
    """
    if pkg.is_auto:
        icon = "[package_auto]○[/]"
        name = f"[package_auto]{escape(pkg.name)}[/]"
    else:
        icon = "[package_manual]●[/]"
        name = f"[package_manual]{escape(pkg.name)}[/]"

    return (
        icon,
        name,
        pkg.version or "-",
        pkg.size_human,
        pkg.category,
        escape(pkg.description) or "-",
    )


def format_size(size_bytes: int) -> str:
    """Return human-readable size string."""
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def print_action_result(result: PackageActionResult) -> None:
    """Print the outcome of a mutating package operation."""
    if result.success:
        print_success(result.message)
    else:
        print_error(f"{result.action.value} {result.name} failed: {result.message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
