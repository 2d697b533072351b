"""Typed loading of the optional `dn.toml` project file.

Every key is optional. Missing values fall back to the environment-derived
defaults in `dn.platform.paths`, so a project without `dn.toml` behaves
exactly like one with an empty file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_number, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigError",
    "DnxConfig",
    "DotnetConfig",
    "ProcessConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "dn.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class DotnetConfig:
    """`[dotnet]` table.

    Attributes:
        dir: dotnet install directory (overrides DOTNET_ROOT)
        installer_branch: dotnet/cli branch the install script is fetched from
        installer_cache: directory holding cached installer scripts
    """

    dir: Path | None = None
    installer_branch: str | None = None
    installer_cache: Path | None = None


@dataclass(frozen=True, slots=True)
class DnxConfig:
    """`[dnx]` table."""

    home: Path | None = None


@dataclass(frozen=True, slots=True)
class ProcessConfig:
    """`[process]` table. A missing timeout means wait forever."""

    timeout: float | None = None


def _path(table: Mapping[str, object], key: str) -> Path | None:
    value = get_str(table, key)
    return Path(value).expanduser() if value else None


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    dotnet: DotnetConfig = field(default_factory=DotnetConfig)
    dnx: DnxConfig = field(default_factory=DnxConfig)
    process: ProcessConfig = field(default_factory=ProcessConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        dotnet: StrDict = get_table(data, "dotnet") or {}
        dnx: StrDict = get_table(data, "dnx") or {}
        process: StrDict = get_table(data, "process") or {}

        timeout = get_number(process, "timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"process.timeout must be positive, got {timeout}")

        return cls(
            dotnet=DotnetConfig(
                dir=_path(dotnet, "dir"),
                installer_branch=get_str(dotnet, "installer_branch"),
                installer_cache=_path(dotnet, "installer_cache"),
            ),
            dnx=DnxConfig(home=_path(dnx, "home")),
            process=ProcessConfig(timeout=timeout),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to dn.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Config:
    """Load config from file, or return the default config if it is absent."""
    if not path.exists():
        return Config()
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return Config()
