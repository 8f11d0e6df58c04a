"""Runtime context derived from the detected distribution.

DistroContext is built once per process. It detects the distribution,
picks the matching package manager adapter and derives family-specific
paths and features; callers share it instead of re-detecting.
"""

import logging
from pathlib import Path
from typing import Any

from distrokit.core.config import Settings, load_settings
from distrokit.core.detector import DistroDetector
from distrokit.core.features import FeatureAvailability
from distrokit.core.paths import DistroPaths
from distrokit.errors import DistroSystemError, UnsupportedDistroError
from distrokit.managers import (
    ArchAdapter,
    DebianAdapter,
    FedoraAdapter,
    PackageManager,
    SuseAdapter,
)
from distrokit.models.distro import DistroFamily, DistroInfo
from distrokit.utils.shell import CommandRunner

logger = logging.getLogger(__name__)


def create_package_manager(
    family: DistroFamily,
    runner: CommandRunner | None = None,
    *,
    simulation: bool = False,
) -> PackageManager:
    """Instantiate the adapter for a distro family.

    Unknown families get the Debian adapter.

    Args:
        family: Detected distribution family.
        runner: Command runner shared by the adapter.
        simulation: Put the adapter in simulation mode.

    Returns:
        PackageManager for the family.

    Raises:
        UnsupportedDistroError: If family is not a DistroFamily.
    """
    match family:
        case DistroFamily.DEBIAN:
            return DebianAdapter(runner, simulation=simulation)
        case DistroFamily.ARCH:
            return ArchAdapter(runner, simulation=simulation)
        case DistroFamily.FEDORA:
            return FedoraAdapter(runner, simulation=simulation)
        case DistroFamily.SUSE:
            return SuseAdapter(runner, simulation=simulation)
        case DistroFamily.UNKNOWN:
            logger.warning("Unknown distro family, falling back to the APT adapter")
            return DebianAdapter(runner, simulation=simulation)
        case _:
            msg = f"No package manager adapter for {family!r}"
            raise UnsupportedDistroError(msg)


class DistroContext:
    """Distro-specific runtime configuration.

    Attributes:
        settings: Settings the context was built from.
        distro: Detected distribution information.
        family: Distribution family.
        package_manager: Shared adapter for the family.
        paths: Family-specific filesystem locations.
        features: Feature availability matrix.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        runner: CommandRunner | None = None,
        home: Path | None = None,
    ) -> None:
        """Detect the distribution and wire up the adapter.

        Args:
            settings: Settings to use. If None, loads them from disk and
                environment.
            runner: Command runner for the adapter. If None, one is built
                from the settings.
            home: User home directory for per-user paths.
        """
        self.settings = settings or load_settings()

        detector = DistroDetector(
            os_release_path=self.settings.os_release_path,
            force_distro=self.settings.force_distro,
        )
        try:
            self.distro: DistroInfo = detector.detect()
        except DistroSystemError as e:
            logger.warning("Distro detection failed, using defaults: %s", e)
            self.distro = DistroInfo.unknown()

        self.family: DistroFamily = self.distro.family
        runner = runner or CommandRunner(
            escalation=self.settings.escalation,
            timeout=self.settings.command_timeout,
            privileged_timeout=self.settings.privileged_timeout,
        )
        self.package_manager: PackageManager = create_package_manager(
            self.family,
            runner,
            simulation=self._simulation_enabled(),
        )
        self.paths = DistroPaths.for_family(self.family, home)
        self.features = FeatureAvailability.for_family(self.family)

    def _simulation_enabled(self) -> bool:
        """Simulate when asked to, or whenever the distro was forced."""
        if self.settings.simulate is not None:
            return self.settings.simulate
        return self.distro.simulated

    @property
    def pm_name(self) -> str:
        """Package manager name for display."""
        return self.family.package_manager_name

    def has_feature(self, feature: str) -> bool:
        """Check if a feature is available. Unknown names return False."""
        return self.features.has(feature)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "distro": self.distro.to_dict(),
            "family": self.family.value,
            "package_manager": self.package_manager.name,
            "simulation": self.package_manager.simulation,
            "paths": self.paths.to_dict(),
            "features": self.features.to_dict(),
        }
