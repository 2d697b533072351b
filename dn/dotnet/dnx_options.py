"""Option records for the legacy DNX tools (dnvm, dnu)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dn.platform.detection import Platform, detect_platform
from dn.platform.paths import default_dnx_home

from .options import BuildConfiguration, Configuration, Overridable

__all__ = [
    "RuntimeArchitecture",
    "PublishRuntime",
    "CustomRuntime",
    "DnvmOptions",
    "DnvmInstallOptions",
    "DnvmRuntimeOptions",
    "DnuRestoreOptions",
    "DnuPublishOptions",
    "DnuPackOptions",
    "dnvm_path",
]


def dnvm_path(dnx_home: Path, platform: Platform) -> Path:
    """Location of the dnvm entry point inside a DNX home."""
    if platform.is_windows:
        return dnx_home / "bin" / "dnvm.cmd"
    return dnx_home / "dnvm" / "dnvm.sh"


def _default_dnvm_path() -> Path:
    return dnvm_path(default_dnx_home(), detect_platform())


class RuntimeArchitecture(Enum):
    X86 = "x86"
    X64 = "x64"


class PublishRuntime(Enum):
    """Runtime bundled by dnu publish; ACTIVE means the runtime in use."""

    ACTIVE = "active"


@dataclass(frozen=True, slots=True)
class CustomRuntime:
    """An explicit runtime id for dnu publish."""

    runtime_id: str


@dataclass(frozen=True, slots=True)
class DnvmOptions(Overridable):
    """Options shared by every dnvm invocation.

    Attributes:
        tool_path: dnvm entry point
        working_dir: working directory of the child process
        auto_install: install dnvm before the first command if it is missing
        build_version: value for `1.0.0-*` version suffixes, handed to the
            child as DNX_BUILD_VERSION
        timeout: seconds before the child is abandoned (None = unbounded)
    """

    tool_path: Path = field(default_factory=_default_dnvm_path)
    working_dir: Path = field(default_factory=Path.cwd)
    auto_install: bool = True
    build_version: str | None = None
    timeout: float | None = None


@dataclass(frozen=True, slots=True)
class DnvmInstallOptions(Overridable):
    """dnvm install options."""

    dnvm: DnvmOptions = field(default_factory=DnvmOptions)
    version_or_alias: str = "latest"
    architecture: RuntimeArchitecture | None = None


@dataclass(frozen=True, slots=True)
class DnvmRuntimeOptions(Overridable):
    """Options for commands run against a specific runtime (dnvm exec)."""

    dnvm: DnvmOptions = field(default_factory=DnvmOptions)
    version_or_alias: str = "default"


@dataclass(frozen=True, slots=True)
class DnuRestoreOptions(Overridable):
    runtime: DnvmRuntimeOptions = field(default_factory=DnvmRuntimeOptions)


@dataclass(frozen=True, slots=True)
class DnuPublishOptions(Overridable):
    """dnu publish options."""

    runtime: DnvmRuntimeOptions = field(default_factory=DnvmRuntimeOptions)
    publish_runtime: PublishRuntime | CustomRuntime = PublishRuntime.ACTIVE
    configuration: Configuration = BuildConfiguration.RELEASE
    output_path: str | None = None
    no_source: bool = False
    quiet: bool = False
    include_symbols: bool = True


@dataclass(frozen=True, slots=True)
class DnuPackOptions(Overridable):
    runtime: DnvmRuntimeOptions = field(default_factory=DnvmRuntimeOptions)
    configuration: Configuration = BuildConfiguration.RELEASE
    output_path: str | None = None
