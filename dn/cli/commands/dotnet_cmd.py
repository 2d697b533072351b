"""dotnet commands - restore/build/pack/publish/msbuild/exec a project."""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path

import typer

from dn.cli.commands._helpers import (
    exit_on_error,
    exit_with_code,
    parse_configuration,
    resolve_working_dir,
    user_error,
)
from dn.cli.context import CLIContext, build_context
from dn.dotnet.options import (
    BuildOptions,
    DotnetOptions,
    MsBuildOptions,
    MsBuildVerbosity,
    PackOptions,
    PublishOptions,
    RestoreOptions,
    RestoreVerbosity,
)
from dn.platform.detection import Platform
from dn.services.dotnet import DotnetService


def _service(ctx: CLIContext) -> DotnetService:
    return DotnetService(
        console=ctx.console,
        config=ctx.config,
        platform=ctx.platform,
    )


def _common(
    service: DotnetService,
    dotnet_dir: Path | None,
    working_dir: Path | None,
    params: str | None,
) -> DotnetOptions:
    common = service.default_options().with_(
        working_dir=resolve_working_dir(working_dir),
        custom_params=params,
    )
    if dotnet_dir is not None:
        common = common.with_(dotnet_dir=dotnet_dir.expanduser())
    return common


_DOTNET_DIR = typer.Option(
    None, "--dotnet-dir", help="dotnet install directory", show_default=False
)
_WORKING_DIR = typer.Option(
    None, "--working-dir", "-C", help="Run the tool from this directory", show_default=False
)
_PARAMS = typer.Option(
    None, "--params", help="Raw text appended after the generated flags", show_default=False
)


def restore(
    project: str = typer.Argument(..., help="Project file or directory"),
    source: list[str] = typer.Option([], "--source", help="NuGet feed (repeatable)"),
    packages: list[str] = typer.Option([], "--packages", help="Packages directory (repeatable)"),
    config_file: str | None = typer.Option(
        None, "--config-file", help="NuGet configuration file", show_default=False
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Do not use the HTTP cache"),
    verbosity: RestoreVerbosity | None = typer.Option(
        None, "--verbosity", help="Restore log level", show_default=False
    ),
    ignore_failed_sources: bool = typer.Option(
        False, "--ignore-failed-sources", help="Only warn about failed sources"
    ),
    disable_parallel: bool = typer.Option(
        False, "--disable-parallel", help="Restore projects one at a time"
    ),
    dotnet_dir: Path | None = _DOTNET_DIR,
    working_dir: Path | None = _WORKING_DIR,
    params: str | None = _PARAMS,
) -> None:
    """Restore the dependencies of a project."""
    ctx = build_context()
    service = _service(ctx)
    options = RestoreOptions(
        common=_common(service, dotnet_dir, working_dir, params),
        sources=tuple(source),
        packages=tuple(packages),
        config_file=config_file,
        no_cache=no_cache,
        verbosity=verbosity,
        ignore_failed_sources=ignore_failed_sources,
        disable_parallel=disable_parallel,
    )
    exit_on_error(service.restore(project, options), ctx)


def build(
    project: str = typer.Argument(..., help="Project file or directory"),
    configuration: str = typer.Option("Release", "--configuration", "-c"),
    framework: str | None = typer.Option(None, "--framework", "-f", show_default=False),
    runtime: str | None = typer.Option(None, "--runtime", "-r", show_default=False),
    build_base_path: str | None = typer.Option(None, "--build-base-path", show_default=False),
    output: str | None = typer.Option(None, "--output", "-o", show_default=False),
    native: bool = typer.Option(False, "--native", help="Compile to native code"),
    dotnet_dir: Path | None = _DOTNET_DIR,
    working_dir: Path | None = _WORKING_DIR,
    params: str | None = _PARAMS,
) -> None:
    """Compile a project."""
    ctx = build_context()
    service = _service(ctx)
    options = BuildOptions(
        common=_common(service, dotnet_dir, working_dir, params),
        configuration=parse_configuration(configuration),
        framework=framework,
        runtime=runtime,
        build_base_path=build_base_path,
        output_path=output,
        native=native,
    )
    exit_on_error(service.build(project, options), ctx)


def pack(
    project: str = typer.Argument(..., help="Project file or directory"),
    configuration: str = typer.Option("Release", "--configuration", "-c"),
    version_suffix: str | None = typer.Option(None, "--version-suffix", show_default=False),
    build_base_path: str | None = typer.Option(None, "--build-base-path", show_default=False),
    output: str | None = typer.Option(None, "--output", "-o", show_default=False),
    no_build: bool = typer.Option(False, "--no-build", help="Pack without building first"),
    dotnet_dir: Path | None = _DOTNET_DIR,
    working_dir: Path | None = _WORKING_DIR,
    params: str | None = _PARAMS,
) -> None:
    """Create a NuGet package from a project."""
    ctx = build_context()
    service = _service(ctx)
    options = PackOptions(
        common=_common(service, dotnet_dir, working_dir, params),
        configuration=parse_configuration(configuration),
        version_suffix=version_suffix,
        build_base_path=build_base_path,
        output_path=output,
        no_build=no_build,
    )
    exit_on_error(service.pack(project, options), ctx)


def publish(
    project: str = typer.Argument(..., help="Project file or directory"),
    configuration: str = typer.Option("Release", "--configuration", "-c"),
    framework: str | None = typer.Option(None, "--framework", "-f", show_default=False),
    runtime: str | None = typer.Option(None, "--runtime", "-r", show_default=False),
    build_base_path: str | None = typer.Option(None, "--build-base-path", show_default=False),
    output: str | None = typer.Option(None, "--output", "-o", show_default=False),
    version_suffix: str | None = typer.Option(None, "--version-suffix", show_default=False),
    no_build: bool = typer.Option(False, "--no-build", help="Publish without building first"),
    dotnet_dir: Path | None = _DOTNET_DIR,
    working_dir: Path | None = _WORKING_DIR,
    params: str | None = _PARAMS,
) -> None:
    """Publish a project for deployment."""
    ctx = build_context()
    service = _service(ctx)
    options = PublishOptions(
        common=_common(service, dotnet_dir, working_dir, params),
        configuration=parse_configuration(configuration),
        framework=framework,
        runtime=runtime,
        build_base_path=build_base_path,
        output_path=output,
        version_suffix=version_suffix,
        no_build=no_build,
    )
    exit_on_error(service.publish(project, options), ctx)


def join_args(args: list[str], platform: Platform) -> str:
    """Quote args so the runner splits them back into the same list."""
    if platform.is_windows:
        return subprocess.list2cmdline(args)
    return shlex.join(args)


def _parse_property(ctx: CLIContext, raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        user_error(ctx, f"invalid --property '{raw}' (expected Name=Value)")
    return name.strip(), value


def msbuild(
    project: str = typer.Argument(..., help="Project or solution file"),
    target: list[str] = typer.Option([], "--target", "-t", help="Target to run (repeatable)"),
    prop: list[str] = typer.Option(
        [], "--property", "-p", help="Global property Name=Value (repeatable)"
    ),
    verbosity: MsBuildVerbosity | None = typer.Option(
        None, "--verbosity", "-v", help="Logger verbosity", show_default=False
    ),
    logo: bool = typer.Option(False, "--logo", help="Show the MSBuild banner"),
    max_cpu: bool = typer.Option(False, "--max-cpu", "-m", help="Build in parallel"),
    dotnet_dir: Path | None = _DOTNET_DIR,
    working_dir: Path | None = _WORKING_DIR,
    params: str | None = _PARAMS,
) -> None:
    """Run MSBuild through `dotnet msbuild`."""
    ctx = build_context()
    service = _service(ctx)
    options = MsBuildOptions(
        common=_common(service, dotnet_dir, working_dir, params),
        targets=tuple(target),
        properties=tuple(_parse_property(ctx, p) for p in prop),
        verbosity=verbosity,
        no_logo=not logo,
        max_cpu=max_cpu,
    )
    exit_on_error(service.msbuild(project, options), ctx)


def exec_cmd(
    args: list[str] = typer.Argument(..., help="Arguments passed to dotnet verbatim"),
    dotnet_dir: Path | None = _DOTNET_DIR,
    working_dir: Path | None = _WORKING_DIR,
) -> None:
    """Run `dotnet <args>` and exit with its exit code."""
    ctx = build_context()
    service = _service(ctx)
    common = _common(service, dotnet_dir, working_dir, None)
    result = exit_on_error(service.exec(join_args(args, ctx.platform), common), ctx)
    exit_with_code(result.exit_code)
