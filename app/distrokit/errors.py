"""Exception hierarchy for distrokit.

Every error raised by the library derives from DistrokitError so callers
can catch the whole family with one clause, or pick out the cases that
need different rendering (e.g. UserCancelledError as a no-op).
"""


class DistrokitError(Exception):
    """Base exception for all distrokit errors."""


class DistroSystemError(DistrokitError):
    """Raised for generic system conditions (e.g. unreadable os-release)."""


class CommandFailedError(DistrokitError):
    """Raised when a native tool ran but exited unsuccessfully.

    Attributes:
        stderr: The tool's standard error, preserved verbatim.
    """

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


class PermissionDeniedError(DistrokitError):
    """Raised when a command is not whitelisted or not authorized."""


class CommandTimeoutError(DistrokitError):
    """Raised when a command or an elevation prompt exceeds its budget."""


class UserCancelledError(DistrokitError):
    """Raised when the user dismisses the elevation dialog."""


class UnsupportedDistroError(DistrokitError):
    """Raised when no adapter can be constructed for a distro family."""


class ConfigError(DistrokitError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""
