"""Maintenance commands: remove, autoremove, clean, refresh.

All of them need root rights; the runner asks for them through pkexec
or sudo.
"""

from typing import Annotated

import typer

from distrokit.cli.types import get_context, run_operation
from distrokit.utils.formatting import print_action_result, print_error, print_success


def remove(
    name: Annotated[str, typer.Argument(help="Package to remove.")],
    purge: Annotated[
        bool,
        typer.Option("--purge", "-p", help="Also remove configuration files."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove an installed package."""
    verb = "Purge" if purge else "Remove"
    if not yes and not typer.confirm(f"{verb} {name}?"):
        raise typer.Abort()

    manager = get_context().package_manager
    operation = manager.purge_package(name) if purge else manager.uninstall_package(name)
    result = run_operation(operation)

    print_action_result(result)
    if result.failed:
        raise typer.Exit(code=1)


def autoremove(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove dependencies nothing requires anymore."""
    if not yes and not typer.confirm("Remove unused dependencies?"):
        raise typer.Abort()

    result = run_operation(get_context().package_manager.autoremove())
    print_action_result(result)
    if result.failed:
        raise typer.Exit(code=1)


def clean() -> None:
    """Clear the package download cache."""
    outcome = run_operation(get_context().package_manager.clean_cache())
    if not outcome.success:
        print_error(outcome.message)
        raise typer.Exit(code=1)
    print_success(outcome.message)


def refresh() -> None:
    """Synchronize repository metadata."""
    message = run_operation(get_context().package_manager.refresh_repositories())
    print_success(message)
