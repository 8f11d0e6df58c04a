"""Distribution models.

This module defines the closed set of distribution families distrokit
supports and the immutable record describing the detected distribution.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DistroFamily(Enum):
    """Linux distribution families, grouped by native package manager."""

    DEBIAN = "debian"
    ARCH = "arch"
    FEDORA = "fedora"
    SUSE = "suse"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        """Human-readable family name."""
        return _DISPLAY_NAMES[self]

    @property
    def package_manager_name(self) -> str:
        """Identifier of the family's native package manager."""
        return _PACKAGE_MANAGERS[self]


_DISPLAY_NAMES: dict[DistroFamily, str] = {
    DistroFamily.DEBIAN: "Debian/Ubuntu",
    DistroFamily.ARCH: "Arch Linux",
    DistroFamily.FEDORA: "Fedora/RHEL",
    DistroFamily.SUSE: "openSUSE/SLES",
    DistroFamily.UNKNOWN: "Unknown",
}

_PACKAGE_MANAGERS: dict[DistroFamily, str] = {
    DistroFamily.DEBIAN: "apt",
    DistroFamily.ARCH: "pacman",
    DistroFamily.FEDORA: "dnf",
    DistroFamily.SUSE: "zypper",
    DistroFamily.UNKNOWN: "unknown",
}


@dataclass(frozen=True, slots=True)
class DistroInfo:
    """Information about the running distribution.

    Attributes:
        id: Lower-cased os-release ID (e.g. 'ubuntu', 'manjaro').
        name: Pretty distribution name from NAME.
        version_id: VERSION_ID value, empty for rolling releases.
        version_codename: VERSION_CODENAME value, if any.
        id_like: Space-separated ID_LIKE value.
        family: Detected distribution family.
        is_supported: Advisory flag for UI messaging only.
        simulated: True when built from a forced override.
    """

    id: str
    name: str
    version_id: str = ""
    version_codename: str = ""
    id_like: str = ""
    family: DistroFamily = DistroFamily.UNKNOWN
    is_supported: bool = False
    simulated: bool = field(default=False)

    @classmethod
    def unknown(cls) -> "DistroInfo":
        """Return the fallback used when detection fails."""
        return cls(id="unknown", name="Unknown Linux")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "version_id": self.version_id,
            "version_codename": self.version_codename,
            "id_like": self.id_like,
            "family": self.family.value,
            "is_supported": self.is_supported,
            "simulated": self.simulated,
        }
