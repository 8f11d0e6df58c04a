"""Debian/Ubuntu package manager adapter.

Lists installed packages with dpkg-query, determines auto-installed
status with apt-mark, and mutates the system with apt-get.
"""

import logging

from distrokit.errors import CommandFailedError
from distrokit.managers.base import PackageManager, parse_name_list
from distrokit.models.package import ActionKind, CleanupOutcome, PackageActionResult, PackageRecord
from distrokit.utils.shell import command_exists

logger = logging.getLogger(__name__)


class DebianAdapter(PackageManager):
    """Adapter for APT/dpkg.

    Uses apt-fast for downloads and cache cleaning when it is installed,
    apt-get otherwise.
    """

    # dpkg-query format string: Package, Version, Installed-Size (KiB), Summary
    DPKG_FORMAT = "${Package}\\t${Version}\\t${Installed-Size}\\t${binary:Summary}\\n"

    # apt-get prints this summary when there is nothing to remove
    _AUTOREMOVE_IDLE = ("0 upgraded, 0 newly installed, 0 to remove",)

    @property
    def name(self) -> str:
        """Return 'apt'."""
        return "apt"

    @property
    def cache_path(self) -> str:
        return "/var/cache/apt/archives"

    @property
    def log_path(self) -> str:
        return "/var/log/apt"

    def _apt_command(self) -> str:
        """Return apt-fast if available, otherwise apt-get."""
        return "apt-fast" if command_exists("apt-fast") else "apt-get"

    async def check_fast_download(self) -> bool:
        """Check if apt-fast is installed."""
        return command_exists("apt-fast")

    async def refresh_repositories(self) -> str:
        """Run apt update (through apt-fast when available)."""
        return await self._run_refresh(
            [self._apt_command(), "update"],
            "Package database updated successfully",
        )

    async def _list_installed(self) -> list[PackageRecord]:
        """Join dpkg-query's listing with apt-mark's auto set.

        Raises:
            CommandFailedError: If dpkg-query fails.
        """
        auto_packages = await self._get_auto_installed()

        result = await self._query(["dpkg-query", "-W", "-f", self.DPKG_FORMAT])
        if not result.success:
            msg = f"dpkg-query failed: {result.stderr.strip() or 'unknown error'}"
            raise CommandFailedError(msg, stderr=result.stderr)

        return self.parse_dpkg_output(result.stdout, auto_packages)

    async def _get_auto_installed(self) -> set[str]:
        """Get the set of package names marked as automatically installed.

        An unavailable apt-mark degrades to an empty set, so every package
        is then reported as explicitly installed.
        """
        try:
            result = await self._query(["apt-mark", "showauto"])
        except CommandFailedError as e:
            logger.warning("apt-mark unavailable, treating all packages as manual: %s", e)
            return set()

        if not result.success:
            logger.warning(
                "apt-mark showauto failed, treating all packages as manual: %s",
                result.stderr.strip() or "unknown error",
            )
            return set()

        return parse_name_list(result.stdout)

    @classmethod
    def parse_dpkg_output(cls, output: str, auto_packages: set[str]) -> list[PackageRecord]:
        """Parse dpkg-query output into records.

        Args:
            output: Tab-separated dpkg-query output.
            auto_packages: Names installed as dependencies.

        Returns:
            One record per well-formed line.
        """
        records: list[PackageRecord] = []
        for line in output.splitlines():
            record = cls._parse_dpkg_line(line, auto_packages)
            if record is not None:
                records.append(record)
        return records

    @classmethod
    def _parse_dpkg_line(cls, line: str, auto_packages: set[str]) -> PackageRecord | None:
        parts = line.split("\t")
        if len(parts) < 3:
            if line.strip():
                logger.debug("Skipping malformed dpkg line (parts=%d): %r", len(parts), line[:100])
            return None

        name = parts[0].strip()
        if not name:
            logger.debug("Skipping dpkg line with empty name: %r", line[:100])
            return None

        size_str = parts[2].strip()
        # dpkg-query reports size in KiB
        size_bytes = int(size_str) * 1024 if size_str.isdigit() else 0
        description = parts[3].strip() if len(parts) >= 4 else ""

        return cls._record(
            name=name,
            version=parts[1].strip(),
            size_bytes=size_bytes,
            description=description,
            is_auto=name in auto_packages,
        )

    async def uninstall_package(self, name: str) -> PackageActionResult:
        """Remove a package with apt-get remove."""
        self._validate_name(name)
        return await self._run_action(
            ["apt-get", "remove", "-y", name],
            name,
            ActionKind.UNINSTALL,
            f"Package {name} removed",
        )

    async def purge_package(self, name: str) -> PackageActionResult:
        """Remove a package and its configuration with apt-get purge."""
        self._validate_name(name)
        return await self._run_action(
            ["apt-get", "purge", "-y", name],
            name,
            ActionKind.PURGE,
            f"Package {name} purged",
        )

    async def autoremove(self) -> PackageActionResult:
        """Remove unused dependencies with apt-get autoremove."""
        return await self._run_action(
            ["apt-get", "autoremove", "-y"],
            "autoremove",
            ActionKind.AUTOREMOVE,
            "Unused packages removed",
            idle_markers=self._AUTOREMOVE_IDLE,
            idle_message="No unused packages to remove",
        )

    async def clean_cache(self) -> CleanupOutcome:
        """Clear downloaded .deb files (through apt-fast when available)."""
        return await self._run_cleanup(
            [self._apt_command(), "clean"],
            "apt_cache",
            "APT cache cleaned",
        )
