"""Library settings.

This module provides the settings model and I/O functions. Settings are
stored in ~/.config/distrokit/config.toml; a missing file means defaults.

Two environment variables override the file:
- FORCE_DISTRO: pretend to run on the given distro ID
- DISTROKIT_SIMULATE: return synthetic package data ("1"/"0")
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from distrokit.core.detector import FORCE_DISTRO_ENV
from distrokit.core.paths import OS_RELEASE_PATH, get_config_path
from distrokit.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from distrokit.utils.shell import EscalationTool

logger = logging.getLogger(__name__)

SIMULATE_ENV = "DISTROKIT_SIMULATE"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class Settings(BaseModel):
    """distrokit settings.

    Attributes:
        os_release_path: OS identification file to read.
        force_distro: Distro ID to simulate instead of detecting.
        simulate: Return synthetic package data. None means "on whenever
            a distro is forced".
        escalation: Tool used for privileged operations.
        command_timeout: Timeout for package queries, in seconds.
        privileged_timeout: Timeout for privileged operations, in seconds.
    """

    model_config = ConfigDict(extra="forbid")

    os_release_path: Annotated[
        Path,
        Field(description="OS identification file"),
    ] = OS_RELEASE_PATH
    force_distro: Annotated[
        str | None,
        Field(description="Distro ID to simulate (e.g. 'fedora')"),
    ] = None
    simulate: Annotated[
        bool | None,
        Field(description="Use synthetic package data (None = follow force_distro)"),
    ] = None
    escalation: Annotated[
        EscalationTool,
        Field(description="Privilege escalation tool"),
    ] = "pkexec"
    command_timeout: Annotated[
        float,
        Field(gt=0, le=3600, description="Query timeout in seconds"),
    ] = 120.0
    privileged_timeout: Annotated[
        float,
        Field(gt=0, le=7200, description="Privileged operation timeout in seconds"),
    ] = 300.0

    @property
    def simulation_enabled(self) -> bool:
        """Whether adapters should return synthetic data."""
        if self.simulate is not None:
            return self.simulate
        return self.force_distro is not None


def apply_env_overrides(settings: Settings) -> Settings:
    """Return a copy of settings with environment overrides applied.

    Args:
        settings: Settings loaded from file or defaults.

    Returns:
        Settings with FORCE_DISTRO and DISTROKIT_SIMULATE applied.
    """
    updates: dict[str, object] = {}

    forced = os.environ.get(FORCE_DISTRO_ENV, "").strip()
    if forced:
        updates["force_distro"] = forced

    simulate = os.environ.get(SIMULATE_ENV, "").strip().lower()
    if simulate in _TRUTHY:
        updates["simulate"] = True
    elif simulate in _FALSY:
        updates["simulate"] = False
    elif simulate:
        logger.warning("Ignoring unrecognised %s value: %r", SIMULATE_ENV, simulate)

    if not updates:
        return settings
    return settings.model_copy(update=updates)


def load_settings(path: Path | None = None, *, use_env: bool = True) -> Settings:
    """Load settings, falling back to defaults when no file exists.

    Args:
        path: Settings file. If None, uses the default config path.
        use_env: Apply environment overrides on top of the file.

    Returns:
        Validated Settings.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        settings = read_settings(path)
    except ConfigNotFoundError:
        settings = Settings()

    return apply_env_overrides(settings) if use_env else settings


def read_settings(path: Path | None = None) -> Settings:
    """Read settings from a TOML file.

    Args:
        path: Settings file. If None, uses the default config path.

    Returns:
        Validated Settings.

    Raises:
        ConfigNotFoundError: If the file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written to a temporary file first and moved into place
    with os.replace().

    Args:
        settings: Settings to save.
        path: Target path. If None, uses the default config path.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null; unset optional values are simply omitted
    data = {
        key: str(value) if isinstance(value, Path) else value
        for key, value in settings.model_dump().items()
        if value is not None
    }

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
