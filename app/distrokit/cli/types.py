"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

import asyncio
from collections.abc import Coroutine
from enum import Enum
from typing import Any, TypeVar

import typer

from distrokit.core.context import DistroContext
from distrokit.errors import ConfigError, DistrokitError, UserCancelledError
from distrokit.utils.formatting import print_error, print_info

T = TypeVar("T")


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_context() -> DistroContext:
    """Build the distro context, exiting on invalid settings."""
    try:
        return DistroContext()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def run_operation(coro: Coroutine[Any, Any, T]) -> T:
    """Run an adapter coroutine and translate library errors to exits.

    A dismissed authentication dialog is reported as a no-op and exits 0.

    Args:
        coro: Coroutine to run.

    Returns:
        The coroutine's result.

    Raises:
        typer.Exit: On any DistrokitError.
    """
    try:
        return asyncio.run(coro)
    except UserCancelledError as e:
        print_info("Operation cancelled, nothing was changed.")
        raise typer.Exit(code=0) from e
    except DistrokitError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
