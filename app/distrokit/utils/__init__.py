"""Utility modules for distrokit.

This module exports commonly used utility functions.
"""

from distrokit.utils.shell import CommandResult, CommandRunner, command_exists

__all__ = ["CommandResult", "CommandRunner", "command_exists"]
