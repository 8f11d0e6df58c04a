"""Data models for distrokit.

This module exports the core data structures used throughout the library.
"""

from distrokit.models.distro import DistroFamily, DistroInfo
from distrokit.models.package import (
    ActionKind,
    CleanupOutcome,
    PackageActionResult,
    PackageRecord,
    PackageStats,
)

__all__ = [
    "ActionKind",
    "CleanupOutcome",
    "DistroFamily",
    "DistroInfo",
    "PackageActionResult",
    "PackageRecord",
    "PackageStats",
]
