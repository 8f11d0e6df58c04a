"""Unit tests for the info command."""

import json

import pytest
from distrokit.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestInfoCommand:
    """Tests for distrokit info."""

    @pytest.fixture(autouse=True)
    def _force_fedora(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FORCE_DISTRO", "fedora")

    def test_table_output(self) -> None:
        """The table view names the distro and package manager."""
        result = runner.invoke(app, ["info"])

        assert result.exit_code == 0
        assert "Fedora Linux 40" in result.stdout
        assert "dnf" in result.stdout
        assert "Simulation mode" in result.stdout

    def test_json_output(self) -> None:
        """--format json emits the context as JSON."""
        result = runner.invoke(app, ["info", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["family"] == "fedora"
        assert data["package_manager"] == "dnf"
        assert data["paths"]["package_cache"] == "/var/cache/dnf"
        assert data["features"]["dnf_automatic"] is True
