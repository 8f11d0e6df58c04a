"""Abstract base class for package managers.

This module defines the PackageManager interface that every distribution
family adapter implements, plus the shared plumbing for running native
tools and turning their results into canonical models.
"""

import logging
import re
from abc import ABC, abstractmethod

from distrokit.core.categorizer import categorize
from distrokit.errors import CommandFailedError, PermissionDeniedError
from distrokit.managers.simulation import simulated_packages
from distrokit.models.package import (
    ActionKind,
    CleanupOutcome,
    PackageActionResult,
    PackageRecord,
    PackageStats,
)
from distrokit.utils.shell import CommandResult, CommandRunner

logger = logging.getLogger(__name__)

# Characters allowed in package names passed to privileged commands
_VALID_NAME = re.compile(r"[A-Za-z0-9.+:_@-]+")


def parse_name_list(output: str) -> set[str]:
    """Parse newline-delimited package names (auto-mark, orphan lists)."""
    return {line.strip() for line in output.splitlines() if line.strip()}


class PackageManager(ABC):
    """Abstract base class for all package manager adapters.

    Adapters query and mutate one family's package database through its
    native tools. They hold no mutable state, so one instance may serve
    concurrent callers.

    Attributes:
        simulation: If True, no native tool is ever run and listings come
            from deterministic synthetic data.

    Example:
        >>> manager = FedoraAdapter(simulation=True)
        >>> packages = await manager.get_installed_packages()
        >>> total, auto, size = await manager.get_stats()
    """

    # Whether simulated listings mark dependencies as auto-installed
    _SIMULATE_AUTO = True

    def __init__(
        self,
        runner: CommandRunner | None = None,
        *,
        simulation: bool = False,
    ) -> None:
        """Initialize the adapter.

        Args:
            runner: Command runner used to execute native tools.
            simulation: If True, return synthetic data without running tools.
        """
        self._runner = runner or CommandRunner()
        self._simulation = simulation

    @property
    def simulation(self) -> bool:
        """Check if the adapter is in simulation mode."""
        return self._simulation

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier of the underlying tool (apt, pacman, dnf, zypper)."""

    @property
    @abstractmethod
    def cache_path(self) -> str:
        """Package download cache directory."""

    @property
    @abstractmethod
    def log_path(self) -> str:
        """Package manager log file or directory."""

    @abstractmethod
    async def refresh_repositories(self) -> str:
        """Synchronize repository metadata.

        Returns:
            Success message.

        Raises:
            CommandFailedError: If the native tool fails (carries stderr).
        """

    async def get_installed_packages(self) -> list[PackageRecord]:
        """List all installed packages, sorted by name.

        Returns:
            Fresh list of PackageRecord; nothing is cached between calls.

        Raises:
            CommandFailedError: If the package database cannot be queried.
        """
        if self._simulation:
            logger.info("[simulated] Returning synthetic package data for %s", self.name)
            return simulated_packages(self.name, track_auto=self._SIMULATE_AUTO)

        records = await self._list_installed()
        return sorted(records, key=lambda r: r.name)

    @abstractmethod
    async def _list_installed(self) -> list[PackageRecord]:
        """Query the native tools for installed packages."""

    async def search_packages(self, query: str) -> list[PackageRecord]:
        """Filter installed packages by name or description.

        Args:
            query: Case-insensitive substring.

        Returns:
            Matching packages.
        """
        needle = query.lower()
        return [
            pkg
            for pkg in await self.get_installed_packages()
            if needle in pkg.name.lower() or needle in pkg.description.lower()
        ]

    @abstractmethod
    async def uninstall_package(self, name: str) -> PackageActionResult:
        """Remove a package, keeping its configuration files.

        Raises:
            PermissionDeniedError: If the name is not a valid package name.
        """

    @abstractmethod
    async def purge_package(self, name: str) -> PackageActionResult:
        """Remove a package together with its configuration."""

    @abstractmethod
    async def autoremove(self) -> PackageActionResult:
        """Remove dependencies that nothing requires anymore.

        Having nothing to remove is a successful result.
        """

    @abstractmethod
    async def clean_cache(self) -> CleanupOutcome:
        """Clear the package download cache."""

    async def get_stats(self) -> PackageStats:
        """Count packages from one installed-package listing.

        Returns:
            PackageStats of (total_count, auto_count, total_size_bytes).
        """
        packages = await self.get_installed_packages()
        return PackageStats(
            total_count=len(packages),
            auto_count=sum(1 for p in packages if p.is_auto),
            total_size_bytes=sum(p.size_bytes for p in packages),
        )

    async def check_fast_download(self) -> bool:
        """Check if a download accelerator is available."""
        return False

    # ------------------------------------------------------------------
    # Shared plumbing
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_name(name: str) -> None:
        """Reject names a native tool could read as an option.

        Raises:
            PermissionDeniedError: If the name is empty, starts with '-'
                or contains characters outside [A-Za-z0-9.+:_@-].
        """
        if not name or name.startswith("-") or not _VALID_NAME.fullmatch(name):
            msg = f"Invalid package name: {name!r}"
            raise PermissionDeniedError(msg)

    @staticmethod
    def _record(
        name: str,
        version: str,
        size_bytes: int,
        description: str,
        is_auto: bool,
    ) -> PackageRecord:
        """Build a PackageRecord and assign its category."""
        return PackageRecord(
            name=name,
            version=version,
            size_bytes=size_bytes,
            description=description,
            is_auto=is_auto,
            category=categorize(name, description),
        )

    async def _query(self, args: list[str]) -> CommandResult:
        """Run an unprivileged query. Simulation yields empty output."""
        if self._simulation:
            logger.debug("[simulated] Skipping query: %s", " ".join(args))
            return CommandResult(stdout="", stderr="", returncode=0)
        return await self._runner.run(args)

    async def _run_action(
        self,
        args: list[str],
        name: str,
        action: ActionKind,
        success_message: str,
        *,
        idle_markers: tuple[str, ...] = (),
        idle_message: str = "",
    ) -> PackageActionResult:
        """Run a privileged mutating command and wrap the outcome.

        Args:
            args: Command to run with elevated rights.
            name: Package name (or 'autoremove').
            action: Operation being performed.
            success_message: Message used on success.
            idle_markers: Output fragments meaning "nothing to do".
            idle_message: Message used when an idle marker is seen.

        Returns:
            PackageActionResult, also for failures of the native tool.

        Raises:
            PermissionDeniedError, UserCancelledError, CommandTimeoutError:
                Propagated from the runner.
        """
        if self._simulation:
            logger.info("[simulated] Would run: %s", " ".join(args))
            return PackageActionResult(name, action, True, f"[simulated] {success_message}")

        logger.info("Executing %s for %s", action.value, name)
        result = await self._runner.run_privileged(args)

        if not result.success:
            return PackageActionResult(name, action, False, self._failure_message(args, result))

        if idle_markers and any(m in result.stdout for m in idle_markers):
            return PackageActionResult(name, action, True, idle_message)
        return PackageActionResult(name, action, True, success_message)

    async def _run_cleanup(
        self,
        args: list[str],
        category: str,
        success_message: str,
    ) -> CleanupOutcome:
        """Run a privileged cache cleaning command and wrap the outcome.

        Native cleaners do not report what they removed, so counts stay 0.
        """
        if self._simulation:
            logger.info("[simulated] Would run: %s", " ".join(args))
            return CleanupOutcome(category, 0, 0, True, f"[simulated] {success_message}")

        logger.info("Cleaning %s", category)
        result = await self._runner.run_privileged(args)

        if not result.success:
            return CleanupOutcome(category, 0, 0, False, self._failure_message(args, result))
        return CleanupOutcome(category, 0, 0, True, success_message)

    async def _run_refresh(self, args: list[str], success_message: str) -> str:
        """Run a privileged metadata refresh.

        Raises:
            CommandFailedError: If the native tool fails.
        """
        if self._simulation:
            logger.info("[simulated] Would run: %s", " ".join(args))
            return f"[simulated] {success_message}"

        result = await self._runner.run_privileged(args)
        if not result.success:
            raise CommandFailedError(self._failure_message(args, result), stderr=result.stderr)
        return success_message

    @staticmethod
    def _failure_message(args: list[str], result: CommandResult) -> str:
        """Pick the most useful diagnostic from a failed command."""
        return (
            result.stderr.strip()
            or result.stdout.strip()
            or f"{' '.join(args)} failed without error output"
        )
