"""Shell execution utilities.

Provides async subprocess execution for package queries and privileged
package operations, with whitelisting and timeouts.
"""

import asyncio
import logging
import os
import shutil
from dataclasses import dataclass
from typing import Literal

from distrokit.errors import (
    CommandFailedError,
    CommandTimeoutError,
    PermissionDeniedError,
    UserCancelledError,
)

logger = logging.getLogger(__name__)

EscalationTool = Literal["pkexec", "sudo"]

# Programs that may be run with elevated rights
PRIVILEGED_COMMANDS: frozenset[str] = frozenset(
    {"apt-get", "apt-fast", "pacman", "paccache", "dnf", "zypper"}
)

# Forces untranslated tool output so parsers see stable labels and units
QUERY_ENV: dict[str, str] = {"LC_ALL": "C", "LANG": "C"}

_CANCEL_MARKERS = ("dismissed", "cancelled", "Not authorized")

# pkexec exit status when the authentication dialog is dismissed
_PKEXEC_DISMISSED = 126


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


class CommandRunner:
    """Runs native tools as subprocesses on the running event loop.

    The runner holds only immutable settings, so one instance can be
    shared by concurrent callers.

    Attributes:
        escalation: Tool used to gain root rights ('pkexec' or 'sudo').
        timeout: Default timeout in seconds for unprivileged queries.
        privileged_timeout: Timeout in seconds for privileged operations,
            including time spent in the authentication dialog.
    """

    def __init__(
        self,
        *,
        escalation: EscalationTool = "pkexec",
        timeout: float = 120.0,
        privileged_timeout: float = 300.0,
    ) -> None:
        self.escalation = escalation
        self.timeout = timeout
        self.privileged_timeout = privileged_timeout

    async def run(
        self,
        args: list[str],
        *,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Execute a command and return the result.

        Args:
            args: Command and arguments to execute.
            timeout: Maximum time in seconds. Defaults to the runner timeout.
            env: Extra environment variables. QUERY_ENV is always applied.

        Returns:
            CommandResult with stdout, stderr, and returncode.

        Raises:
            CommandFailedError: If the executable cannot be started.
            CommandTimeoutError: If the command exceeds the timeout.
        """
        full_env = {**os.environ, **QUERY_ENV, **(env or {})}
        return await self._execute(args, timeout or self.timeout, full_env)

    async def run_privileged(
        self,
        args: list[str],
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        """Execute a whitelisted command with root privileges.

        Args:
            args: Command and arguments, without the escalation prefix.
            timeout: Maximum time in seconds. Defaults to privileged_timeout.

        Returns:
            CommandResult of the escalated command.

        Raises:
            PermissionDeniedError: If the program is not whitelisted.
            UserCancelledError: If the authentication dialog was dismissed.
            CommandFailedError: If the escalation tool cannot be started.
            CommandTimeoutError: If the command exceeds the timeout.
        """
        if not args or args[0] not in PRIVILEGED_COMMANDS:
            program = args[0] if args else "<empty>"
            msg = f"Command '{program}' is not in the allowed list"
            raise PermissionDeniedError(msg)

        prefix = ["pkexec"] if self.escalation == "pkexec" else ["sudo", "-n"]
        logger.info("Running privileged command: %s", " ".join(args))

        result = await self._execute(
            prefix + args,
            timeout or self.privileged_timeout,
            {**os.environ, **QUERY_ENV},
        )

        if not result.success and self._is_cancelled(result):
            msg = "Authentication was cancelled by the user"
            raise UserCancelledError(msg)

        return result

    def _is_cancelled(self, result: CommandResult) -> bool:
        """Check whether a failed escalation means the user said no."""
        if self.escalation == "pkexec" and result.returncode == _PKEXEC_DISMISSED:
            return True
        return any(marker in result.stderr for marker in _CANCEL_MARKERS)

    async def _execute(
        self,
        args: list[str],
        timeout: float,
        env: dict[str, str] | None,
    ) -> CommandResult:
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except FileNotFoundError as e:
            msg = f"Command not found: {args[0]}"
            raise CommandFailedError(msg, stderr=str(e)) from e
        except OSError as e:
            msg = f"Failed to execute {args[0]}: {e}"
            raise CommandFailedError(msg, stderr=str(e)) from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except TimeoutError as e:
            proc.kill()
            await proc.wait()
            msg = f"{args[0]} timed out after {timeout:g} seconds"
            raise CommandTimeoutError(msg) from e

        return CommandResult(
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
            returncode=proc.returncode if proc.returncode is not None else -1,
        )
