"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from distrokit.core.config import SIMULATE_ENV
from distrokit.core.detector import FORCE_DISTRO_ENV
from distrokit.utils.shell import CommandResult, CommandRunner


@pytest.fixture(autouse=True)
def _isolated_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    """Keep the host environment and config out of every test."""
    monkeypatch.delenv(FORCE_DISTRO_ENV, raising=False)
    monkeypatch.delenv(SIMULATE_ENV, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg-config")))


@pytest.fixture
def mock_runner() -> MagicMock:
    """CommandRunner double whose run/run_privileged are AsyncMocks."""
    empty = CommandResult(stdout="", stderr="", returncode=0)
    runner = MagicMock(spec=CommandRunner)
    runner.run = AsyncMock(return_value=empty)
    runner.run_privileged = AsyncMock(return_value=empty)
    return runner


@pytest.fixture
def mock_dpkg_output() -> str:
    """Sample dpkg-query output for testing."""
    return """firefox\t128.0\t204800\tMozilla Firefox web browser
neovim\t0.9.5\t51200\tVim-based text editor
libgtk-3-0\t3.24.41\t10240\tGTK graphical toolkit
python3\t3.11.4\t25600\tInteractive high-level object-oriented language
curl\t8.5.0\t512\tCommand line tool for transferring data"""


@pytest.fixture
def mock_apt_mark_output() -> str:
    """Sample apt-mark showauto output for testing."""
    return """libgtk-3-0
python3"""


@pytest.fixture
def mock_pacman_qi_output() -> str:
    """Sample pacman -Qi output with three stanzas."""
    return """Name            : bash
Version         : 5.2.026-2
Description     : The GNU Bourne Again shell
Architecture    : x86_64
URL             : https://www.gnu.org/software/bash/bash.html
Installed Size  : 8.21 MiB
Install Reason  : Explicitly installed

Name            : glibc
Version         : 2.39+r52-1
Description     : GNU C Library
Architecture    : x86_64
Installed Size  : 47.63 MiB
Install Reason  : Installed as a dependency for another package

Name            : tzdata
Version         : 2024a-1
Description     : Sources for time zone and daylight saving time data
Installed Size  : 1 MiB
Install Reason  : Installed as a dependency for another package

"""


@pytest.fixture
def mock_rpm_output() -> str:
    """Sample rpm --queryformat output for testing."""
    return """bash\t5.2.26-3.fc40\t8392145\tThe GNU Bourne Again shell
glibc\t2.39-15.fc40\t6624215\tThe GNU libc libraries
firefox\t128.0-1.fc40\t262144000\tMozilla Firefox Web browser
kernel-core\t6.9.7-200.fc40\t73400320\tThe Linux kernel"""
