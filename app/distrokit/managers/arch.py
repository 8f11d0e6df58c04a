"""Arch Linux package manager adapter.

Parses pacman's verbose per-package stanza dump (``pacman -Qi``) and
marks everything outside the explicit set (``pacman -Qeq``) as a
dependency.
"""

import logging
import math

from distrokit.errors import CommandFailedError
from distrokit.managers.base import PackageManager, parse_name_list
from distrokit.models.package import ActionKind, CleanupOutcome, PackageActionResult, PackageRecord
from distrokit.utils.shell import command_exists

logger = logging.getLogger(__name__)

# pacman pads field labels to a fixed column
NAME_FIELD = "Name            :"
VERSION_FIELD = "Version         :"
SIZE_FIELD = "Installed Size  :"
DESCRIPTION_FIELD = "Description     :"

# Binary multipliers; pacman's "KB" spelling also means KiB
_SIZE_UNITS: dict[str, int] = {
    "b": 1,
    "kib": 1024,
    "kb": 1024,
    "mib": 1024**2,
    "mb": 1024**2,
    "gib": 1024**3,
    "gb": 1024**3,
}


def parse_size(size_str: str) -> int:
    """Parse a pacman size string such as '12.5 MiB' into bytes.

    Args:
        size_str: '<number> <unit>' as printed by pacman.

    Returns:
        Size in bytes, or 0 if the string cannot be parsed.
    """
    parts = size_str.split()
    if len(parts) < 2:
        return 0

    try:
        number = float(parts[0])
    except ValueError:
        return 0
    if not math.isfinite(number) or number < 0:
        return 0

    multiplier = _SIZE_UNITS.get(parts[1].lower())
    if multiplier is None:
        return 0
    return int(number * multiplier)


def _field_value(line: str, label: str) -> str:
    return line[len(label) :].strip()


class ArchAdapter(PackageManager):
    """Adapter for pacman.

    Cache cleaning uses paccache (pacman-contrib) when installed, keeping
    only the latest version of each package.
    """

    @property
    def name(self) -> str:
        """Return 'pacman'."""
        return "pacman"

    @property
    def cache_path(self) -> str:
        return "/var/cache/pacman/pkg"

    @property
    def log_path(self) -> str:
        return "/var/log/pacman.log"

    async def refresh_repositories(self) -> str:
        """Synchronize package databases with pacman -Sy."""
        return await self._run_refresh(["pacman", "-Sy"], "Package database synchronized")

    async def _list_installed(self) -> list[PackageRecord]:
        """Combine the explicit set with the -Qi stanza dump.

        Raises:
            CommandFailedError: If either pacman query fails.
        """
        explicit = await self._get_explicit()

        result = await self._query(["pacman", "-Qi"])
        if not result.success:
            msg = f"pacman -Qi failed: {result.stderr.strip() or 'unknown error'}"
            raise CommandFailedError(msg, stderr=result.stderr)

        return self.parse_stanzas(result.stdout, explicit)

    async def _get_explicit(self) -> set[str]:
        """Get the names of explicitly installed packages.

        pacman exits non-zero without output when nothing matches, which
        is an empty set rather than an error.
        """
        result = await self._query(["pacman", "-Qeq"])
        if not result.success and result.stderr.strip():
            msg = f"pacman -Qeq failed: {result.stderr.strip()}"
            raise CommandFailedError(msg, stderr=result.stderr)
        return parse_name_list(result.stdout)

    @classmethod
    def parse_stanzas(cls, output: str, explicit: set[str]) -> list[PackageRecord]:
        """Parse a ``pacman -Qi`` dump.

        Fields accumulate line by line and a record is flushed at every
        blank line (and at the end of the output).

        Args:
            output: Stanza dump.
            explicit: Names of explicitly installed packages.

        Returns:
            One record per stanza with a name.
        """
        records: list[PackageRecord] = []
        name = version = description = ""
        size_bytes = 0

        def flush() -> None:
            if name:
                records.append(
                    cls._record(
                        name=name,
                        version=version,
                        size_bytes=size_bytes,
                        description=description,
                        is_auto=name not in explicit,
                    )
                )

        for line in output.splitlines():
            if line.startswith(NAME_FIELD):
                name = _field_value(line, NAME_FIELD)
            elif line.startswith(VERSION_FIELD):
                version = _field_value(line, VERSION_FIELD)
            elif line.startswith(SIZE_FIELD):
                size_bytes = parse_size(_field_value(line, SIZE_FIELD))
            elif line.startswith(DESCRIPTION_FIELD):
                description = _field_value(line, DESCRIPTION_FIELD)
            elif not line.strip():
                flush()
                name = version = description = ""
                size_bytes = 0

        flush()
        return records

    async def uninstall_package(self, name: str) -> PackageActionResult:
        """Remove a package with pacman -R."""
        self._validate_name(name)
        return await self._run_action(
            ["pacman", "-R", "--noconfirm", name],
            name,
            ActionKind.UNINSTALL,
            f"Package {name} removed",
        )

    async def purge_package(self, name: str) -> PackageActionResult:
        """Remove a package, its unneeded dependencies and backup files."""
        self._validate_name(name)
        return await self._run_action(
            ["pacman", "-Rns", "--noconfirm", name],
            name,
            ActionKind.PURGE,
            f"Package {name} purged with dependencies",
        )

    async def autoremove(self) -> PackageActionResult:
        """Remove orphan packages listed by pacman -Qdtq."""
        result = await self._query(["pacman", "-Qdtq"])
        orphans = sorted(parse_name_list(result.stdout))

        if not orphans:
            # -Qdtq exits 1 with no output when there are no orphans
            if not result.success and result.stderr.strip():
                return PackageActionResult(
                    "autoremove", ActionKind.AUTOREMOVE, False, result.stderr.strip()
                )
            return PackageActionResult(
                "autoremove", ActionKind.AUTOREMOVE, True, "No orphan packages to remove"
            )

        return await self._run_action(
            ["pacman", "-Rns", "--noconfirm", *orphans],
            "autoremove",
            ActionKind.AUTOREMOVE,
            f"Removed {len(orphans)} orphan packages",
        )

    async def clean_cache(self) -> CleanupOutcome:
        """Clear old package files, preferring paccache over pacman -Sc."""
        if command_exists("paccache"):
            args = ["paccache", "-r", "-k", "1"]
        else:
            args = ["pacman", "-Sc", "--noconfirm"]
        return await self._run_cleanup(args, "pacman_cache", "Pacman cache cleaned")
