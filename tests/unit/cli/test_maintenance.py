"""Unit tests for remove, autoremove, clean and refresh."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from distrokit.cli.main import app
from distrokit.errors import CommandFailedError, UserCancelledError
from distrokit.models.package import ActionKind, CleanupOutcome, PackageActionResult
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def mock_context() -> MagicMock:
    """Context whose package manager is fully mocked."""
    ctx = MagicMock()
    manager = ctx.package_manager
    manager.uninstall_package = AsyncMock(
        return_value=PackageActionResult("vim", ActionKind.UNINSTALL, True, "Package vim removed")
    )
    manager.purge_package = AsyncMock(
        return_value=PackageActionResult("vim", ActionKind.PURGE, True, "Package vim purged")
    )
    manager.autoremove = AsyncMock(
        return_value=PackageActionResult(
            "autoremove", ActionKind.AUTOREMOVE, True, "No unused packages to remove"
        )
    )
    manager.clean_cache = AsyncMock(
        return_value=CleanupOutcome("dnf_cache", 0, 0, True, "DNF cache cleaned")
    )
    manager.refresh_repositories = AsyncMock(return_value="Package database updated")
    return ctx


class TestSimulatedMaintenance:
    """Commands against a forced, simulated distro."""

    @pytest.fixture(autouse=True)
    def _force_arch(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FORCE_DISTRO", "arch")

    def test_remove(self) -> None:
        """remove --yes succeeds without touching the system."""
        result = runner.invoke(app, ["remove", "firefox", "--yes"])

        assert result.exit_code == 0
        assert "[simulated]" in result.stdout

    def test_clean(self) -> None:
        """clean reports success."""
        result = runner.invoke(app, ["clean"])

        assert result.exit_code == 0
        assert "Pacman cache cleaned" in result.stdout

    def test_refresh(self) -> None:
        """refresh reports success."""
        result = runner.invoke(app, ["refresh"])

        assert result.exit_code == 0
        assert "Package database synchronized" in result.stdout

    def test_remove_rejects_option_like_name(self) -> None:
        """A name that looks like an option is refused with exit 1."""
        result = runner.invoke(app, ["remove", "--yes", "--", "-oDPkg::Pre-Invoke::=id"])

        assert result.exit_code == 1
        assert "Invalid package name" in result.output


class TestRemoveCommand:
    """Tests for distrokit remove."""

    def test_confirmation_declined(self, mock_context: MagicMock) -> None:
        """Answering no aborts before anything runs."""
        with patch("distrokit.cli.commands.maintenance.get_context", return_value=mock_context):
            result = runner.invoke(app, ["remove", "vim"], input="n\n")

        assert result.exit_code == 1
        mock_context.package_manager.uninstall_package.assert_not_awaited()

    def test_purge(self, mock_context: MagicMock) -> None:
        """--purge calls purge_package."""
        with patch("distrokit.cli.commands.maintenance.get_context", return_value=mock_context):
            result = runner.invoke(app, ["remove", "vim", "--purge", "--yes"])

        assert result.exit_code == 0
        mock_context.package_manager.purge_package.assert_awaited_once_with("vim")

    def test_failure_exits_1(self, mock_context: MagicMock) -> None:
        """A failed removal shows the message and exits 1."""
        mock_context.package_manager.uninstall_package.return_value = PackageActionResult(
            "vim", ActionKind.UNINSTALL, False, "E: Unable to locate package vim"
        )

        with patch("distrokit.cli.commands.maintenance.get_context", return_value=mock_context):
            result = runner.invoke(app, ["remove", "vim", "-y"])

        assert result.exit_code == 1
        assert "Unable to locate package" in result.output

    def test_cancelled_is_noop(self, mock_context: MagicMock) -> None:
        """Dismissing the authentication dialog exits 0."""
        mock_context.package_manager.uninstall_package.side_effect = UserCancelledError(
            "Authentication was cancelled by the user"
        )

        with patch("distrokit.cli.commands.maintenance.get_context", return_value=mock_context):
            result = runner.invoke(app, ["remove", "vim", "-y"])

        assert result.exit_code == 0
        assert "Operation cancelled" in result.output


class TestOtherMaintenance:
    """Tests for autoremove, clean and refresh."""

    def test_autoremove(self, mock_context: MagicMock) -> None:
        """autoremove --yes prints the adapter's message."""
        with patch("distrokit.cli.commands.maintenance.get_context", return_value=mock_context):
            result = runner.invoke(app, ["autoremove", "--yes"])

        assert result.exit_code == 0
        assert "No unused packages to remove" in result.output

    def test_clean_failure(self, mock_context: MagicMock) -> None:
        """A failed cleanup exits 1."""
        mock_context.package_manager.clean_cache.return_value = CleanupOutcome(
            "dnf_cache", 0, 0, False, "Error: cache locked"
        )

        with patch("distrokit.cli.commands.maintenance.get_context", return_value=mock_context):
            result = runner.invoke(app, ["clean"])

        assert result.exit_code == 1
        assert "cache locked" in result.output

    def test_refresh_failure(self, mock_context: MagicMock) -> None:
        """A failed refresh exits 1 with the tool's message."""
        mock_context.package_manager.refresh_repositories.side_effect = CommandFailedError(
            "Curl error (6)", stderr="Curl error (6)"
        )

        with patch("distrokit.cli.commands.maintenance.get_context", return_value=mock_context):
            result = runner.invoke(app, ["refresh"])

        assert result.exit_code == 1
        assert "Curl error" in result.output
