"""Unit tests for shell execution utilities."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from distrokit.errors import (
    CommandFailedError,
    CommandTimeoutError,
    PermissionDeniedError,
    UserCancelledError,
)
from distrokit.utils.shell import CommandResult, CommandRunner, command_exists


def _fake_process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> MagicMock:
    proc = MagicMock()
    proc.communicate = AsyncMock(return_value=(stdout, stderr))
    proc.wait = AsyncMock(return_value=returncode)
    proc.returncode = returncode
    return proc


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self) -> None:
        """Only exit code 0 is success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success is True
        assert CommandResult(stdout="", stderr="", returncode=1).success is False


class TestCommandExists:
    """Tests for command_exists."""

    @patch("distrokit.utils.shell.shutil.which", return_value="/usr/bin/dnf")
    def test_found(self, mock_which: MagicMock) -> None:
        """A command on PATH exists."""
        assert command_exists("dnf") is True
        mock_which.assert_called_once_with("dnf")

    @patch("distrokit.utils.shell.shutil.which", return_value=None)
    def test_missing(self, mock_which: MagicMock) -> None:
        """A command not on PATH does not exist."""
        assert command_exists("nope") is False


class TestCommandRunnerRun:
    """Tests for unprivileged execution."""

    @pytest.mark.asyncio
    async def test_captures_output(self) -> None:
        """stdout, stderr and exit code are returned decoded."""
        proc = _fake_process(b"bash\n", b"warning\n", 0)
        with patch(
            "distrokit.utils.shell.asyncio.create_subprocess_exec",
            AsyncMock(return_value=proc),
        ) as mock_exec:
            result = await CommandRunner().run(["pacman", "-Qeq"])

        assert result == CommandResult(stdout="bash\n", stderr="warning\n", returncode=0)
        assert mock_exec.await_args.args == ("pacman", "-Qeq")

    @pytest.mark.asyncio
    async def test_forces_c_locale(self) -> None:
        """Queries run with LC_ALL=C plus any extra variables."""
        with patch(
            "distrokit.utils.shell.asyncio.create_subprocess_exec",
            AsyncMock(return_value=_fake_process()),
        ) as mock_exec:
            await CommandRunner().run(["rpm", "-qa"], env={"FOO": "bar"})

        env = mock_exec.await_args.kwargs["env"]
        assert env["LC_ALL"] == "C"
        assert env["FOO"] == "bar"

    @pytest.mark.asyncio
    async def test_invalid_utf8_is_replaced(self) -> None:
        """Undecodable bytes do not raise."""
        with patch(
            "distrokit.utils.shell.asyncio.create_subprocess_exec",
            AsyncMock(return_value=_fake_process(b"caf\xe9")),
        ):
            result = await CommandRunner().run(["dpkg-query", "-W"])

        assert result.stdout.startswith("caf")

    @pytest.mark.asyncio
    async def test_missing_executable(self) -> None:
        """A missing program raises CommandFailedError."""
        with (
            patch(
                "distrokit.utils.shell.asyncio.create_subprocess_exec",
                AsyncMock(side_effect=FileNotFoundError("no such file")),
            ),
            pytest.raises(CommandFailedError, match="Command not found: zypper"),
        ):
            await CommandRunner().run(["zypper", "packages"])

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self) -> None:
        """A hanging command is killed and raises CommandTimeoutError."""

        async def hang() -> tuple[bytes, bytes]:
            await asyncio.sleep(10)
            return b"", b""

        proc = _fake_process()
        proc.communicate = hang
        with (
            patch(
                "distrokit.utils.shell.asyncio.create_subprocess_exec",
                AsyncMock(return_value=proc),
            ),
            pytest.raises(CommandTimeoutError, match="timed out"),
        ):
            await CommandRunner().run(["dnf", "repoquery"], timeout=0.01)

        proc.kill.assert_called_once()


class TestCommandRunnerPrivileged:
    """Tests for privileged execution."""

    @pytest.mark.asyncio
    async def test_rejects_unlisted_program(self) -> None:
        """Programs outside the whitelist are refused before spawning."""
        with (
            patch("distrokit.utils.shell.asyncio.create_subprocess_exec") as mock_exec,
            pytest.raises(PermissionDeniedError),
        ):
            await CommandRunner().run_privileged(["rm", "-rf", "/"])

        mock_exec.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_empty_command(self) -> None:
        """An empty command is refused."""
        with pytest.raises(PermissionDeniedError):
            await CommandRunner().run_privileged([])

    @pytest.mark.asyncio
    async def test_pkexec_prefix(self) -> None:
        """pkexec is prepended by default."""
        with patch(
            "distrokit.utils.shell.asyncio.create_subprocess_exec",
            AsyncMock(return_value=_fake_process()),
        ) as mock_exec:
            await CommandRunner().run_privileged(["dnf", "clean", "all"])

        assert mock_exec.await_args.args == ("pkexec", "dnf", "clean", "all")

    @pytest.mark.asyncio
    async def test_sudo_prefix(self) -> None:
        """sudo runs non-interactively."""
        with patch(
            "distrokit.utils.shell.asyncio.create_subprocess_exec",
            AsyncMock(return_value=_fake_process()),
        ) as mock_exec:
            await CommandRunner(escalation="sudo").run_privileged(["pacman", "-Sy"])

        assert mock_exec.await_args.args == ("sudo", "-n", "pacman", "-Sy")

    @pytest.mark.asyncio
    async def test_forces_c_locale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Privileged commands also run untranslated, keeping PATH."""
        monkeypatch.setenv("LANG", "de_DE.UTF-8")
        with patch(
            "distrokit.utils.shell.asyncio.create_subprocess_exec",
            AsyncMock(return_value=_fake_process()),
        ) as mock_exec:
            await CommandRunner().run_privileged(["apt-get", "autoremove", "-y"])

        env = mock_exec.await_args.kwargs["env"]
        assert env["LC_ALL"] == "C"
        assert env["LANG"] == "C"
        assert "PATH" in env

    @pytest.mark.asyncio
    async def test_dismissed_dialog_raises(self) -> None:
        """pkexec exit status 126 means the user cancelled."""
        with (
            patch(
                "distrokit.utils.shell.asyncio.create_subprocess_exec",
                AsyncMock(return_value=_fake_process(returncode=126)),
            ),
            pytest.raises(UserCancelledError),
        ):
            await CommandRunner().run_privileged(["apt-get", "clean"])

    @pytest.mark.asyncio
    async def test_not_authorized_raises(self) -> None:
        """'Not authorized' on stderr also means cancellation."""
        proc = _fake_process(
            stderr=b"Error executing command as another user: Not authorized\n",
            returncode=127,
        )
        with (
            patch(
                "distrokit.utils.shell.asyncio.create_subprocess_exec",
                AsyncMock(return_value=proc),
            ),
            pytest.raises(UserCancelledError),
        ):
            await CommandRunner().run_privileged(["zypper", "refresh"])

    @pytest.mark.asyncio
    async def test_tool_failure_is_returned(self) -> None:
        """Ordinary failures come back as a result, not an exception."""
        with patch(
            "distrokit.utils.shell.asyncio.create_subprocess_exec",
            AsyncMock(return_value=_fake_process(stderr=b"E: locked\n", returncode=100)),
        ):
            result = await CommandRunner().run_privileged(["apt-get", "remove", "-y", "vim"])

        assert result.success is False
        assert result.stderr == "E: locked\n"
