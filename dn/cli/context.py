from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from dn.core.config import CONFIG_FILE_NAME, Config, load_config, load_config_or_default
from dn.core.errors import ErrorCode
from dn.core.result import Err
from dn.output.console import ConsoleProtocol, RichConsole
from dn.platform.detection import Platform, detect_platform

# Set by `dn --config`; an explicit config file must load cleanly.
CONFIG_ENV = "DN_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    platform: Platform
    config: Config
    console: ConsoleProtocol


def _load_config() -> Config:
    explicit = os.environ.get(CONFIG_ENV)
    if not explicit:
        return load_config_or_default(Path.cwd() / CONFIG_FILE_NAME)

    result = load_config(Path(explicit))
    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
    return result.value


def build_context() -> CLIContext:
    return CLIContext(
        platform=detect_platform(),
        config=_load_config(),
        console=RichConsole(),
    )
