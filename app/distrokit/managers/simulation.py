"""Synthetic package data for simulation mode.

Used when there is no real package database to query (tests, forced
distros, development on other systems). The output is deterministic.
"""

from distrokit.core.categorizer import categorize
from distrokit.models.package import PackageRecord

# name, base version, size in bytes, description, installed as dependency
_SAMPLE_PACKAGES: tuple[tuple[str, str, int, str, bool], ...] = (
    ("bash", "5.2.26", 8_912_896, "The GNU Bourne Again shell", False),
    ("firefox", "128.0", 251_658_240, "Mozilla Firefox web browser", False),
    ("gcc", "14.1.1", 104_857_600, "The GNU Compiler Collection", False),
    ("git", "2.45.2", 41_943_040, "Fast, scalable, distributed revision control system", False),
    ("gnome-terminal", "3.52.2", 9_437_184, "Terminal emulator for GNOME", False),
    ("libreoffice-writer", "24.2.4", 52_428_800, "Word processor", False),
    ("vlc", "3.0.21", 15_728_640, "Multimedia player and streamer", False),
    ("pipewire", "1.0.7", 3_145_728, "Low-latency audio and video server", True),
    ("glibc", "2.39", 31_457_280, "The GNU C library", True),
    ("libpng", "1.6.43", 614_400, "PNG reference library", True),
    ("noto-fonts", "20240401", 104_857_600, "Google Noto TTF fonts", True),
    ("python3", "3.12.4", 34_603_008, "Interactive high-level object-oriented language", True),
    ("systemd", "255.8", 26_214_400, "System and service manager", True),
    ("man-pages-doc", "6.7", 2_097_152, "Manual pages", True),
)

_VERSION_SUFFIX: dict[str, str] = {
    "apt": "-1",
    "pacman": "-1",
    "dnf": "-1.fc40",
    "zypper": "-1.1",
}


def simulated_packages(manager: str, *, track_auto: bool = True) -> list[PackageRecord]:
    """Return a deterministic package listing for a package manager.

    Args:
        manager: Package manager name (apt, pacman, dnf, zypper).
        track_auto: If False, every package is reported as explicit.

    Returns:
        List of PackageRecord sorted by name.
    """
    suffix = _VERSION_SUFFIX.get(manager, "")
    records = [
        PackageRecord(
            name=name,
            version=f"{version}{suffix}",
            size_bytes=size,
            description=description,
            is_auto=is_auto and track_auto,
            category=categorize(name, description),
        )
        for name, version, size, description, is_auto in _SAMPLE_PACKAGES
    ]
    return sorted(records, key=lambda r: r.name)
