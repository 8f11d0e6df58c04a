"""Fedora/RHEL package manager adapter.

Reads installed packages from rpm and asks dnf which of them the user
installed explicitly.
"""

import logging

from distrokit.errors import CommandFailedError
from distrokit.managers.base import parse_name_list
from distrokit.managers.rpm import RpmPackageManager
from distrokit.models.package import ActionKind, CleanupOutcome, PackageActionResult

logger = logging.getLogger(__name__)


class FedoraAdapter(RpmPackageManager):
    """Adapter for dnf/rpm.

    dnf has no purge concept, so purge_package behaves like
    uninstall_package.
    """

    _NOTHING_TO_DO = ("Nothing to do",)

    @property
    def name(self) -> str:
        """Return 'dnf'."""
        return "dnf"

    @property
    def cache_path(self) -> str:
        return "/var/cache/dnf"

    @property
    def log_path(self) -> str:
        return "/var/log/dnf.log"

    async def refresh_repositories(self) -> str:
        """Rebuild the repository metadata cache with dnf makecache."""
        return await self._run_refresh(["dnf", "makecache"], "Package database updated")

    async def _auto_context(self) -> set[str] | None:
        """Get the names of user-installed packages.

        Returns:
            The user-installed set, or None when dnf cannot tell; every
            package is then reported as explicitly installed.
        """
        try:
            result = await self._query(
                ["dnf", "repoquery", "--userinstalled", "--qf", "%{name}\\n"]
            )
        except CommandFailedError as e:
            logger.warning("dnf unavailable, treating all packages as manual: %s", e)
            return None

        if not result.success:
            logger.warning(
                "dnf repoquery --userinstalled failed, treating all packages as manual: %s",
                result.stderr.strip() or "unknown error",
            )
            return None
        return parse_name_list(result.stdout)

    def _is_auto(self, name: str, context: set[str] | None) -> bool:
        if context is None:
            return False
        return name not in context

    async def uninstall_package(self, name: str) -> PackageActionResult:
        """Remove a package with dnf remove."""
        self._validate_name(name)
        return await self._run_action(
            ["dnf", "remove", "-y", name],
            name,
            ActionKind.UNINSTALL,
            f"Package {name} removed",
        )

    async def purge_package(self, name: str) -> PackageActionResult:
        """Same as uninstall_package; dnf does not keep config residue apart."""
        return await self.uninstall_package(name)

    async def autoremove(self) -> PackageActionResult:
        """Remove unneeded dependencies with dnf autoremove."""
        return await self._run_action(
            ["dnf", "autoremove", "-y"],
            "autoremove",
            ActionKind.AUTOREMOVE,
            "Unused packages removed",
            idle_markers=self._NOTHING_TO_DO,
            idle_message="No unused packages to remove",
        )

    async def clean_cache(self) -> CleanupOutcome:
        """Clear cached packages and metadata with dnf clean all."""
        return await self._run_cleanup(["dnf", "clean", "all"], "dnf_cache", "DNF cache cleaned")
