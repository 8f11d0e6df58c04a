"""Filesystem locations for distrokit and for the running distribution.

Application paths follow the XDG Base Directory Specification:
- Config: ~/.config/distrokit/

Distribution paths (package cache, logs, repository sources) depend on
the detected family and are computed once by DistroContext.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from distrokit.models.distro import DistroFamily

# Application identifier for directory naming
APP_NAME = "distrokit"

# Standard location of the OS identification file
OS_RELEASE_PATH = Path("/etc/os-release")


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/distrokit/ (or XDG_CONFIG_HOME/distrokit/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default settings file path.

    Returns:
        Path to ~/.config/distrokit/config.toml.
    """
    return get_config_dir() / "config.toml"


# Package cache and log locations per family
_PACKAGE_LOCATIONS: dict[DistroFamily, tuple[str, str, str | None]] = {
    DistroFamily.DEBIAN: ("/var/cache/apt/archives", "/var/log/apt", "/etc/apt/sources.list.d"),
    # Arch uses a mirrorlist, there is no directory of repo files
    DistroFamily.ARCH: ("/var/cache/pacman/pkg", "/var/log/pacman.log", None),
    DistroFamily.FEDORA: ("/var/cache/dnf", "/var/log/dnf.log", "/etc/yum.repos.d"),
    DistroFamily.SUSE: ("/var/cache/zypp", "/var/log/zypper.log", "/etc/zypp/repos.d"),
    DistroFamily.UNKNOWN: ("/var/cache", "/var/log", None),
}


@dataclass(frozen=True, slots=True)
class DistroPaths:
    """Family-specific filesystem locations.

    Attributes:
        package_cache: Package manager download cache.
        package_logs: Package manager log file or directory.
        system_logs: System log directory.
        journal_dir: Persistent systemd journal directory.
        trash_dir: User trash directory.
        user_cache: User cache directory.
        sources_dir: Repository definition directory, None for Arch.
        thumbnail_cache: User thumbnail cache directory.
    """

    package_cache: Path
    package_logs: Path
    system_logs: Path
    journal_dir: Path
    trash_dir: Path
    user_cache: Path
    sources_dir: Path | None
    thumbnail_cache: Path

    @classmethod
    def for_family(cls, family: DistroFamily, home: Path | None = None) -> "DistroPaths":
        """Create paths for a distro family.

        Args:
            family: Detected distribution family.
            home: User home directory. Defaults to Path.home().

        Returns:
            DistroPaths for the family.
        """
        home = home or Path.home()
        cache, logs, sources = _PACKAGE_LOCATIONS[family]
        return cls(
            package_cache=Path(cache),
            package_logs=Path(logs),
            system_logs=Path("/var/log"),
            journal_dir=Path("/var/log/journal"),
            trash_dir=home / ".local" / "share" / "Trash",
            user_cache=home / ".cache",
            sources_dir=Path(sources) if sources else None,
            thumbnail_cache=home / ".cache" / "thumbnails",
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "package_cache": str(self.package_cache),
            "package_logs": str(self.package_logs),
            "system_logs": str(self.system_logs),
            "journal_dir": str(self.journal_dir),
            "trash_dir": str(self.trash_dir),
            "user_cache": str(self.user_cache),
            "sources_dir": str(self.sources_dir) if self.sources_dir else None,
            "thumbnail_cache": str(self.thumbnail_cache),
        }
