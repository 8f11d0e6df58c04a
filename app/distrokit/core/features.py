"""Feature availability matrix per distribution family."""

from dataclasses import asdict, dataclass, fields

from distrokit.models.distro import DistroFamily


@dataclass(frozen=True, slots=True)
class FeatureAvailability:
    """Which optional integrations make sense on a family.

    Attributes:
        repositories: Repository files can be edited (sources.list.d etc.).
        apt_fast: apt-fast integration.
        pacman_cache: paccache-based cache cleaning.
        dnf_automatic: dnf-automatic updates.
        zypper_patterns: zypper patterns.
        flatpak: Flatpak is expected to be usable.
        snap: Snap is expected to be usable.
    """

    repositories: bool = False
    apt_fast: bool = False
    pacman_cache: bool = False
    dnf_automatic: bool = False
    zypper_patterns: bool = False
    flatpak: bool = False
    snap: bool = False

    @classmethod
    def for_family(cls, family: DistroFamily) -> "FeatureAvailability":
        """Build the feature matrix for a distro family."""
        match family:
            case DistroFamily.DEBIAN:
                return cls(repositories=True, apt_fast=True, flatpak=True, snap=True)
            case DistroFamily.ARCH:
                # Mirrorlist instead of repo files, snap only via AUR
                return cls(pacman_cache=True, flatpak=True)
            case DistroFamily.FEDORA:
                return cls(repositories=True, dnf_automatic=True, flatpak=True)
            case DistroFamily.SUSE:
                return cls(repositories=True, zypper_patterns=True, flatpak=True)
            case _:
                return cls()

    def has(self, feature: str) -> bool:
        """Check a feature by name. Unknown names are unavailable."""
        if feature not in {f.name for f in fields(self)}:
            return False
        return bool(getattr(self, feature))

    def to_dict(self) -> dict[str, bool]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
