"""openSUSE/SLES package manager adapter.

Reads installed packages from rpm and mutates the system with zypper.
zypper offers no reliable record of which packages were pulled in as
dependencies, so every package is reported with is_auto=False.
"""

import logging

from distrokit.managers.rpm import RpmPackageManager
from distrokit.models.package import ActionKind, CleanupOutcome, PackageActionResult

logger = logging.getLogger(__name__)

_ZYPPER = ["zypper", "--non-interactive"]


def parse_unneeded(output: str) -> list[str]:
    """Extract package names from ``zypper packages --unneeded``.

    The output is a '|' separated table whose third column is the name;
    header and separator rows are skipped.

    Args:
        output: zypper table output.

    Returns:
        Sorted, de-duplicated package names.
    """
    names: set[str] = set()
    for line in output.splitlines():
        columns = [col.strip() for col in line.split("|")]
        if len(columns) < 3 or not columns[0].startswith("i"):
            continue
        if columns[2]:
            names.add(columns[2])
    return sorted(names)


class SuseAdapter(RpmPackageManager):
    """Adapter for zypper/rpm.

    zypper has no purge concept, so purge_package behaves like
    uninstall_package.
    """

    _SIMULATE_AUTO = False

    @property
    def name(self) -> str:
        """Return 'zypper'."""
        return "zypper"

    @property
    def cache_path(self) -> str:
        return "/var/cache/zypp"

    @property
    def log_path(self) -> str:
        return "/var/log/zypper.log"

    async def refresh_repositories(self) -> str:
        """Refresh all repositories with zypper refresh."""
        return await self._run_refresh([*_ZYPPER, "refresh"], "Repositories refreshed")

    async def uninstall_package(self, name: str) -> PackageActionResult:
        """Remove a package with zypper remove."""
        self._validate_name(name)
        return await self._run_action(
            [*_ZYPPER, "remove", name],
            name,
            ActionKind.UNINSTALL,
            f"Package {name} removed",
        )

    async def purge_package(self, name: str) -> PackageActionResult:
        """Same as uninstall_package."""
        return await self.uninstall_package(name)

    async def autoremove(self) -> PackageActionResult:
        """Remove packages zypper reports as unneeded."""
        result = await self._query(["zypper", "--quiet", "packages", "--unneeded"])
        if not result.success:
            return PackageActionResult(
                "autoremove",
                ActionKind.AUTOREMOVE,
                False,
                self._failure_message(["zypper", "packages", "--unneeded"], result),
            )

        unneeded = parse_unneeded(result.stdout)
        logger.debug("zypper reports %d unneeded packages", len(unneeded))
        if not unneeded:
            return PackageActionResult(
                "autoremove", ActionKind.AUTOREMOVE, True, "No unneeded packages to remove"
            )

        return await self._run_action(
            [*_ZYPPER, "remove", "--clean-deps", *unneeded],
            "autoremove",
            ActionKind.AUTOREMOVE,
            f"Removed {len(unneeded)} unneeded packages",
        )

    async def clean_cache(self) -> CleanupOutcome:
        """Clear cached packages and metadata with zypper clean --all."""
        return await self._run_cleanup(
            [*_ZYPPER, "clean", "--all"], "zypper_cache", "Zypper cache cleaned"
        )
