"""Package models shared by every package manager adapter.

This module defines the canonical data structures that adapters produce,
independent of which distribution family they come from.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, NamedTuple


class ActionKind(Enum):
    """Type of mutating package operation.

    Attributes:
        UNINSTALL: Remove a package, keeping its configuration files.
        PURGE: Remove a package including configuration residue.
        AUTOREMOVE: Remove dependencies nothing requires anymore.
    """

    UNINSTALL = "uninstall"
    PURGE = "purge"
    AUTOREMOVE = "autoremove"


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """One installed package from a package database snapshot.

    Records are rebuilt on every listing call and only describe the
    system at the instant they were produced.

    Attributes:
        name: Package name, unique within one snapshot.
        version: Free-form, family-specific version string.
        size_bytes: Installed footprint, always in bytes.
        description: One-line summary.
        is_auto: True if installed as a dependency.
        category: Label assigned by the categorizer.
    """

    name: str
    version: str
    size_bytes: int
    description: str
    is_auto: bool
    category: str

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Package size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def size_human(self) -> str:
        """Return human-readable size string."""
        size = float(self.size_bytes)
        for unit in ("B", "KB", "MB", "GB"):
            if size < 1024:
                return f"{size:.1f} {unit}"
            size /= 1024
        return f"{size:.1f} TB"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


@dataclass(frozen=True, slots=True)
class PackageActionResult:
    """Outcome of an uninstall, purge or autoremove.

    A failed result always carries a diagnostic message, usually the
    native tool's stderr.

    Attributes:
        name: Package name, or 'autoremove' for autoremove runs.
        action: The operation that was attempted.
        success: Whether the native tool reported success.
        message: Human-readable outcome.
    """

    name: str
    action: ActionKind
    success: bool
    message: str

    def __post_init__(self) -> None:
        """Reject failures without a diagnostic."""
        if not self.success and not self.message.strip():
            msg = "A failed action must carry a non-empty message"
            raise ValueError(msg)

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return not self.success

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "action": self.action.value,
            "success": self.success,
            "message": self.message,
        }


@dataclass(frozen=True, slots=True)
class CleanupOutcome:
    """Outcome of a package cache cleaning run.

    Most native tools do not report what they removed, so zero counts are
    normal even on success.

    Attributes:
        category: Cache identifier (e.g. 'apt_cache').
        items_removed: Best-effort count of removed files.
        bytes_freed: Best-effort number of bytes reclaimed.
        success: Whether the native tool reported success.
        message: Human-readable outcome.
    """

    category: str
    items_removed: int
    bytes_freed: int
    success: bool
    message: str

    def __post_init__(self) -> None:
        """Reject failures without a diagnostic."""
        if not self.success and not self.message.strip():
            msg = "A failed cleanup must carry a non-empty message"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class PackageStats(NamedTuple):
    """Package counts derived from one installed-package listing."""

    total_count: int
    auto_count: int
    total_size_bytes: int

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return self._asdict()
