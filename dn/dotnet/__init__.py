"""Typed option records, argument rendering and failure values for .NET tools."""

from .errors import CommandFailed, ConfigParseFailed, DotnetError, InstallFailed
from .global_json import global_json_sdk
from .options import (
    BuildConfiguration,
    BuildOptions,
    CliInstallOptions,
    CustomConfiguration,
    DotnetOptions,
    MsBuildOptions,
    PackOptions,
    PublishOptions,
    RestoreOptions,
    SdkVersions,
)

__all__ = [
    # errors
    "CommandFailed",
    "ConfigParseFailed",
    "DotnetError",
    "InstallFailed",
    # global.json
    "global_json_sdk",
    # options
    "BuildConfiguration",
    "BuildOptions",
    "CliInstallOptions",
    "CustomConfiguration",
    "DotnetOptions",
    "MsBuildOptions",
    "PackOptions",
    "PublishOptions",
    "RestoreOptions",
    "SdkVersions",
]
