"""Rendering of option records into tool argument strings.

Everything here is a pure function: the same record always renders to the
same string. Fragment order per subcommand is fixed and is part of the
contract with the tool, so renderers list their fragments explicitly.

Values are wrapped in double quotes verbatim. Embedded double quotes are
not escaped; a value containing `"` produces a broken command line.
"""

from __future__ import annotations

from collections.abc import Iterable

from dn.platform.shell import InstallerShell

from .dnx_options import (
    DnuPackOptions,
    DnuPublishOptions,
    DnvmInstallOptions,
    PublishRuntime,
)
from .options import (
    BuildConfiguration,
    BuildOptions,
    CliArchitecture,
    CliInstallOptions,
    Configuration,
    ExactVersion,
    MsBuildOptions,
    PackOptions,
    PublishOptions,
    RestoreOptions,
)

__all__ = [
    "flag",
    "option",
    "repeated",
    "render",
    "command_line",
    "with_custom_params",
    "configuration_value",
    "configuration_arg",
    "restore_args",
    "pack_args",
    "publish_args",
    "build_args",
    "msbuild_args",
    "install_args",
    "dnvm_install_args",
    "dnu_publish_args",
    "dnu_pack_args",
]


# -----------------------------------------------------------------------------
# Primitives
# -----------------------------------------------------------------------------


def flag(name: str, present: bool) -> str:
    """`--name` if present, else nothing."""
    return f"--{name}" if present else ""


def option(name: str, value: str | None) -> str:
    """`--name "value"` if value is set, else nothing."""
    if value is None:
        return ""
    return f'--{name} "{value}"'


def repeated(name: str, values: Iterable[str]) -> str:
    """`--name "v"` once per value, in order."""
    return " ".join(f'--{name} "{v}"' for v in values)


def render(fragments: Iterable[str]) -> str:
    """Join non-empty fragments with single spaces."""
    return " ".join(f for f in fragments if f)


def command_line(subcommand: str, target: str, flags: str) -> str:
    """`<subcommand> <target> <flags>`.

    The separator before the flags is always present, so an empty flag set
    leaves a trailing space (e.g. "restore app.csproj ").
    """
    return f"{subcommand} {target} {flags}"


def with_custom_params(arguments: str, custom_params: str | None) -> str:
    if custom_params is None:
        return arguments
    return f"{arguments} {custom_params}"


def configuration_value(configuration: Configuration) -> str:
    """Debug/Release canonical names; custom names pass through untouched."""
    if isinstance(configuration, BuildConfiguration):
        return configuration.value
    return configuration.name


def configuration_arg(configuration: Configuration) -> str:
    return f"--configuration {configuration_value(configuration)}"


# -----------------------------------------------------------------------------
# dotnet subcommands
# -----------------------------------------------------------------------------


def restore_args(options: RestoreOptions) -> str:
    verbosity = f"--verbosity {options.verbosity.value}" if options.verbosity else ""
    return render(
        [
            repeated("source", options.sources),
            repeated("packages", options.packages),
            option("configFile", options.config_file),
            flag("no-cache", options.no_cache),
            flag("ignore-failed-sources", options.ignore_failed_sources),
            flag("disable-parallel", options.disable_parallel),
            verbosity,
        ]
    )


def pack_args(options: PackOptions) -> str:
    return render(
        [
            configuration_arg(options.configuration),
            option("version-suffix", options.version_suffix),
            option("build-base-path", options.build_base_path),
            option("output", options.output_path),
            flag("no-build", options.no_build),
        ]
    )


def publish_args(options: PublishOptions) -> str:
    return render(
        [
            configuration_arg(options.configuration),
            option("framework", options.framework),
            option("runtime", options.runtime),
            option("build-base-path", options.build_base_path),
            option("output", options.output_path),
            option("version-suffix", options.version_suffix),
            flag("no-build", options.no_build),
        ]
    )


def build_args(options: BuildOptions) -> str:
    return render(
        [
            configuration_arg(options.configuration),
            option("framework", options.framework),
            option("runtime", options.runtime),
            option("build-base-path", options.build_base_path),
            option("output", options.output_path),
            flag("native", options.native),
        ]
    )


def msbuild_args(options: MsBuildOptions) -> str:
    """MSBuild-style switches: /t:, /p:, /v:, /nologo, /m."""
    targets = f"/t:{';'.join(options.targets)}" if options.targets else ""
    properties = " ".join(f'/p:{name}="{value}"' for name, value in options.properties)
    verbosity = f"/v:{options.verbosity.value}" if options.verbosity else ""
    return render(
        [
            targets,
            properties,
            verbosity,
            "/nologo" if options.no_logo else "",
            "/m" if options.max_cpu else "",
        ]
    )


def install_args(options: CliInstallOptions, shell: InstallerShell) -> str:
    """Arguments for dotnet-install.ps1 / dotnet-install.sh."""
    version = (
        options.version.version
        if isinstance(options.version, ExactVersion)
        else options.version.value
    )
    architecture = (
        ""
        if options.architecture == CliArchitecture.AUTO
        else f"{shell.switch('architecture')} {options.architecture.value}"
    )

    def switch(name: str, present: bool) -> str:
        return shell.switch(name) if present else ""

    return render(
        [
            f"{shell.switch('version')} {shell.quote(version)}",
            f"{shell.switch('channel')} {shell.quote(options.channel.value)}",
            architecture,
            switch("debug-symbols", options.debug_symbols),
            switch("dry-run", options.dry_run),
            switch("no-path", options.no_path),
        ]
    )


# -----------------------------------------------------------------------------
# dnvm / dnu
# -----------------------------------------------------------------------------


def dnvm_install_args(options: DnvmInstallOptions) -> str:
    # dnvm takes the version positionally, before the switches.
    architecture = f"-a {options.architecture.value}" if options.architecture else ""
    return render([options.version_or_alias, architecture])


def dnu_publish_args(options: DnuPublishOptions) -> str:
    runtime = (
        options.publish_runtime.value
        if isinstance(options.publish_runtime, PublishRuntime)
        else options.publish_runtime.runtime_id
    )
    return render(
        [
            configuration_arg(options.configuration),
            f"--runtime {runtime}",
            option("out", options.output_path),
            flag("no-source", options.no_source),
            flag("quiet", options.quiet),
            flag("include-symbols", options.include_symbols),
        ]
    )


def dnu_pack_args(options: DnuPackOptions) -> str:
    return render(
        [
            configuration_arg(options.configuration),
            option("out", options.output_path),
        ]
    )
