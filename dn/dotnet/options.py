"""Option records for the dotnet CLI.

Each record is a frozen dataclass whose field defaults are the tool
defaults. A caller overrides only what it needs, either at construction
or by layering on an existing record:

    opts = PackOptions(configuration=CustomConfiguration("CI"))
    opts = opts.with_(version_suffix="beta1", output_path="./out")

Every subcommand record holds exactly one `DotnetOptions`, and therefore
resolves to exactly one dotnet executable.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Self

from dn.platform.detection import Platform, detect_platform
from dn.platform.paths import default_dotnet_dir

__all__ = [
    "BuildConfiguration",
    "CustomConfiguration",
    "Configuration",
    "RestoreVerbosity",
    "MsBuildVerbosity",
    "VersionAlias",
    "ExactVersion",
    "InstallVersion",
    "CliChannel",
    "CliArchitecture",
    "DotnetOptions",
    "CliInstallOptions",
    "RestoreOptions",
    "PackOptions",
    "PublishOptions",
    "BuildOptions",
    "MsBuildOptions",
    "SdkVersions",
    "DEFAULT_INSTALLER_BRANCH",
]

DEFAULT_INSTALLER_BRANCH = "rel/1.0.0"


class Overridable:
    """Mixin giving frozen option records a `with_(**changes)` copy method."""

    __slots__ = ()

    def with_(self, **changes: object) -> Self:
        return dataclasses.replace(self, **changes)  # type: ignore[type-var]


# -----------------------------------------------------------------------------
# Enumerations
# -----------------------------------------------------------------------------


class BuildConfiguration(Enum):
    """The two configurations every project has."""

    DEBUG = "Debug"
    RELEASE = "Release"


@dataclass(frozen=True, slots=True)
class CustomConfiguration:
    """Any other configuration name; rendered exactly as given."""

    name: str


type Configuration = BuildConfiguration | CustomConfiguration


class RestoreVerbosity(Enum):
    """NuGet restore log level (--verbosity)."""

    DEBUG = "Debug"
    VERBOSE = "Verbose"
    INFORMATION = "Information"
    MINIMAL = "Minimal"
    WARNING = "Warning"
    ERROR = "Error"


class MsBuildVerbosity(Enum):
    """MSBuild logger verbosity (/v:)."""

    QUIET = "q"
    MINIMAL = "m"
    NORMAL = "n"
    DETAILED = "d"
    DIAGNOSTIC = "diag"


class VersionAlias(Enum):
    """Floating CLI versions understood by the install script."""

    LATEST = "latest"
    LKG = "lkg"


@dataclass(frozen=True, slots=True)
class ExactVersion:
    """A pinned CLI/SDK version, e.g. "1.0.1"."""

    version: str


type InstallVersion = VersionAlias | ExactVersion


class CliChannel(Enum):
    FUTURE = "future"
    PREVIEW = "preview"
    PRODUCTION = "production"


class CliArchitecture(Enum):
    """Architecture to install. AUTO lets the script decide."""

    AUTO = "auto"
    X86 = "x86"
    X64 = "x64"


# -----------------------------------------------------------------------------
# Tool options
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DotnetOptions(Overridable):
    """Options shared by every dotnet invocation.

    Attributes:
        dotnet_dir: dotnet install directory
        working_dir: working directory of the child process
        custom_params: raw text appended after the rendered flags
        timeout: seconds before the child is abandoned (None = unbounded)
        platform: decides the executable name (dotnet vs dotnet.exe)
    """

    dotnet_dir: Path = field(default_factory=default_dotnet_dir)
    working_dir: Path = field(default_factory=Path.cwd)
    custom_params: str | None = None
    timeout: float | None = None
    platform: Platform = field(default_factory=detect_platform)

    @property
    def tool_path(self) -> Path:
        return self.dotnet_dir / self.platform.exe_name("dotnet")


@dataclass(frozen=True, slots=True)
class CliInstallOptions(Overridable):
    """dotnet CLI / SDK install options.

    Attributes:
        always_download: fetch the install script even if a cached copy exists
        version: version to install (alias or exact)
        channel: distribution channel
        architecture: architecture to install
        custom_install_dir: install somewhere other than the default directory
        debug_symbols: include symbols in the installation
        dry_run: let the script print what it would do instead of installing
        no_path: do not let the script touch PATH
        installer_branch: dotnet/cli branch the install script comes from
        force_install: run the installer even if the pinned SDK is present
        timeout: seconds before the installer is abandoned
    """

    always_download: bool = False
    version: InstallVersion = VersionAlias.LATEST
    channel: CliChannel = CliChannel.PREVIEW
    architecture: CliArchitecture = CliArchitecture.AUTO
    custom_install_dir: Path | None = None
    debug_symbols: bool = False
    dry_run: bool = False
    no_path: bool = True
    installer_branch: str = DEFAULT_INSTALLER_BRANCH
    force_install: bool = False
    timeout: float | None = None

    def install_dir(self, platform: Platform | None = None) -> Path:
        """custom_install_dir, else the default dotnet directory for platform."""
        return self.custom_install_dir or default_dotnet_dir(platform)

    @property
    def pinned_version(self) -> str | None:
        if isinstance(self.version, ExactVersion):
            return self.version.version
        return None


# -----------------------------------------------------------------------------
# Subcommand options
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RestoreOptions(Overridable):
    """dotnet restore options.

    Attributes:
        common: common tool options
        sources: NuGet feeds to search (--source); defaults are used if empty
        packages: directories to install packages in (--packages)
        config_file: NuGet configuration file (--configFile)
        no_cache: do not use the HTTP cache (--no-cache)
        verbosity: restore log level (--verbosity)
        ignore_failed_sources: only warn about failed sources (--ignore-failed-sources)
        disable_parallel: restore projects one at a time (--disable-parallel)
    """

    common: DotnetOptions = field(default_factory=DotnetOptions)
    sources: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()
    config_file: str | None = None
    no_cache: bool = False
    verbosity: RestoreVerbosity | None = None
    ignore_failed_sources: bool = False
    disable_parallel: bool = False


@dataclass(frozen=True, slots=True)
class PackOptions(Overridable):
    """dotnet pack options."""

    common: DotnetOptions = field(default_factory=DotnetOptions)
    configuration: Configuration = BuildConfiguration.RELEASE
    version_suffix: str | None = None
    build_base_path: str | None = None
    output_path: str | None = None
    no_build: bool = False


@dataclass(frozen=True, slots=True)
class PublishOptions(Overridable):
    """dotnet publish options.

    `version_suffix` replaces `*` in the project.json version field.
    """

    common: DotnetOptions = field(default_factory=DotnetOptions)
    configuration: Configuration = BuildConfiguration.RELEASE
    framework: str | None = None
    runtime: str | None = None
    build_base_path: str | None = None
    output_path: str | None = None
    version_suffix: str | None = None
    no_build: bool = False


@dataclass(frozen=True, slots=True)
class BuildOptions(Overridable):
    """dotnet build options."""

    common: DotnetOptions = field(default_factory=DotnetOptions)
    configuration: Configuration = BuildConfiguration.RELEASE
    framework: str | None = None
    runtime: str | None = None
    build_base_path: str | None = None
    output_path: str | None = None
    native: bool = False


@dataclass(frozen=True, slots=True)
class MsBuildOptions(Overridable):
    """dotnet msbuild passthrough options.

    Attributes:
        targets: targets to run (/t:A;B)
        properties: global properties, rendered in order (/p:Name=Value)
        verbosity: logger verbosity (/v:)
        no_logo: hide the MSBuild banner (/nologo)
        max_cpu: build in parallel (/m)
    """

    common: DotnetOptions = field(default_factory=DotnetOptions)
    targets: tuple[str, ...] = ()
    properties: tuple[tuple[str, str], ...] = ()
    verbosity: MsBuildVerbosity | None = None
    no_logo: bool = True
    max_cpu: bool = False


class SdkVersions:
    """Known-good install presets."""

    PREVIEW2_TOOLING = CliInstallOptions(
        version=ExactVersion("1.0.0-preview2-003121"),
        channel=CliChannel.PREVIEW,
        installer_branch="rel/1.0.0-preview2",
    )
    NETCORE_100 = CliInstallOptions(
        version=ExactVersion("1.0.0"),
        channel=CliChannel.PRODUCTION,
        installer_branch="rel/1.0.0",
    )
    NETCORE_101 = CliInstallOptions(
        version=ExactVersion("1.0.1"),
        channel=CliChannel.PRODUCTION,
        installer_branch="rel/1.0.1",
    )

    @classmethod
    def names(cls) -> dict[str, CliInstallOptions]:
        return {
            "preview2-tooling": cls.PREVIEW2_TOOLING,
            "netcore-1.0.0": cls.NETCORE_100,
            "netcore-1.0.1": cls.NETCORE_101,
        }
