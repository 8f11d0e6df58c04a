"""Unit tests for DistroContext and adapter selection."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from distrokit.core.config import Settings, load_settings
from distrokit.core.context import DistroContext, create_package_manager
from distrokit.errors import UnsupportedDistroError
from distrokit.managers import ArchAdapter, DebianAdapter, FedoraAdapter, SuseAdapter
from distrokit.models.distro import DistroFamily

FEDORA_OS_RELEASE = """NAME="Fedora Linux"
VERSION_ID=40
ID=fedora
"""


class TestCreatePackageManager:
    """Tests for create_package_manager."""

    @pytest.mark.parametrize(
        ("family", "adapter_cls"),
        [
            (DistroFamily.DEBIAN, DebianAdapter),
            (DistroFamily.ARCH, ArchAdapter),
            (DistroFamily.FEDORA, FedoraAdapter),
            (DistroFamily.SUSE, SuseAdapter),
            (DistroFamily.UNKNOWN, DebianAdapter),
        ],
    )
    def test_adapter_per_family(self, family: DistroFamily, adapter_cls: type) -> None:
        """Each family gets its adapter; unknown falls back to APT."""
        assert isinstance(create_package_manager(family), adapter_cls)

    def test_non_family_rejected(self) -> None:
        """Anything outside DistroFamily has no adapter."""
        with pytest.raises(UnsupportedDistroError):
            create_package_manager("gentoo")  # type: ignore[arg-type]

    def test_simulation_flag_passed(self) -> None:
        """The adapter inherits the simulation flag."""
        assert create_package_manager(DistroFamily.ARCH, simulation=True).simulation is True


class TestDistroContext:
    """Tests for DistroContext."""

    @pytest.mark.asyncio
    async def test_forced_fedora(
        self, monkeypatch: pytest.MonkeyPatch, mock_runner: MagicMock
    ) -> None:
        """FORCE_DISTRO=fedora yields a simulated dnf context."""
        monkeypatch.setenv("FORCE_DISTRO", "fedora")

        ctx = DistroContext(load_settings(), runner=mock_runner)

        assert ctx.family is DistroFamily.FEDORA
        assert isinstance(ctx.package_manager, FedoraAdapter)
        assert ctx.package_manager.cache_path == "/var/cache/dnf"
        assert ctx.pm_name == "dnf"
        assert ctx.distro.simulated is True

        packages = await ctx.package_manager.get_installed_packages()
        assert packages
        mock_runner.run.assert_not_awaited()

    def test_reads_os_release(self, tmp_path: Path, mock_runner: MagicMock) -> None:
        """Without overrides the os-release file decides."""
        os_release = tmp_path / "os-release"
        os_release.write_text(FEDORA_OS_RELEASE)

        ctx = DistroContext(Settings(os_release_path=os_release), runner=mock_runner)

        assert ctx.family is DistroFamily.FEDORA
        assert ctx.distro.is_supported is True
        assert ctx.package_manager.simulation is False

    def test_unreadable_os_release_falls_back(
        self, tmp_path: Path, mock_runner: MagicMock
    ) -> None:
        """Detection failure gives the unknown distro and the APT adapter."""
        ctx = DistroContext(Settings(os_release_path=tmp_path / "missing"), runner=mock_runner)

        assert ctx.family is DistroFamily.UNKNOWN
        assert ctx.distro.name == "Unknown Linux"
        assert isinstance(ctx.package_manager, DebianAdapter)

    def test_arch_paths_and_features(self, tmp_path: Path) -> None:
        """Arch has no sources directory and no repository feature."""
        ctx = DistroContext(Settings(force_distro="arch"), home=tmp_path)

        assert ctx.paths.sources_dir is None
        assert ctx.paths.trash_dir == tmp_path / ".local" / "share" / "Trash"
        assert ctx.has_feature("pacman_cache") is True
        assert ctx.has_feature("repositories") is False
        assert ctx.has_feature("nonsense") is False

    def test_to_dict(self) -> None:
        """to_dict summarizes the context for JSON output."""
        data = DistroContext(Settings(force_distro="opensuse-tumbleweed")).to_dict()

        assert data["family"] == "suse"
        assert data["package_manager"] == "zypper"
        assert data["simulation"] is True
        assert data["distro"]["simulated"] is True
        assert data["paths"]["package_cache"] == "/var/cache/zypp"
        assert data["features"]["zypper_patterns"] is True

    @pytest.mark.asyncio
    async def test_forced_by_environment_only(
        self, monkeypatch: pytest.MonkeyPatch, mock_runner: MagicMock
    ) -> None:
        """A distro forced only through FORCE_DISTRO still simulates."""
        monkeypatch.setenv("FORCE_DISTRO", "fedora")

        ctx = DistroContext(Settings(), runner=mock_runner)

        assert isinstance(ctx.package_manager, FedoraAdapter)
        assert ctx.distro.simulated is True
        assert ctx.package_manager.simulation is True
        assert await ctx.package_manager.get_installed_packages()
        mock_runner.run.assert_not_awaited()

    def test_explicit_simulate_wins(
        self, monkeypatch: pytest.MonkeyPatch, mock_runner: MagicMock
    ) -> None:
        """simulate=False keeps real tools even for a forced distro."""
        monkeypatch.setenv("FORCE_DISTRO", "arch")

        ctx = DistroContext(Settings(simulate=False), runner=mock_runner)

        assert ctx.family is DistroFamily.ARCH
        assert ctx.package_manager.simulation is False

    def test_simulate_without_forcing(self, tmp_path: Path, mock_runner: MagicMock) -> None:
        """simulate=True works on a detected distro too."""
        os_release = tmp_path / "os-release"
        os_release.write_text(FEDORA_OS_RELEASE)

        ctx = DistroContext(
            Settings(os_release_path=os_release, simulate=True), runner=mock_runner
        )

        assert ctx.distro.simulated is False
        assert ctx.package_manager.simulation is True
