"""Install and SDK lookup commands."""

from __future__ import annotations

from pathlib import Path

import typer

from dn.cli.commands._helpers import exit_on_error, user_error
from dn.cli.context import build_context
from dn.dotnet.global_json import global_json_sdk
from dn.dotnet.options import (
    CliArchitecture,
    CliChannel,
    CliInstallOptions,
    ExactVersion,
    SdkVersions,
    VersionAlias,
)
from dn.platform.paths import default_dotnet_dir
from dn.services.dotnet import DotnetService
from dn.tools.installer import InstallStatus


def _version(value: str) -> VersionAlias | ExactVersion:
    try:
        return VersionAlias(value.lower())
    except ValueError:
        return ExactVersion(value)


def install(
    preset: str | None = typer.Option(
        None,
        "--preset",
        help=f"Known-good SDK ({', '.join(SdkVersions.names())})",
        show_default=False,
    ),
    version: str = typer.Option("latest", "--version", help="latest, lkg or an exact version"),
    channel: CliChannel = typer.Option(CliChannel.PREVIEW, "--channel"),
    architecture: CliArchitecture = typer.Option(CliArchitecture.AUTO, "--architecture"),
    install_dir: Path | None = typer.Option(
        None, "--install-dir", help="Install somewhere else than the default", show_default=False
    ),
    branch: str | None = typer.Option(
        None, "--branch", help="dotnet/cli branch to take the installer from", show_default=False
    ),
    debug_symbols: bool = typer.Option(False, "--debug-symbols"),
    always_download: bool = typer.Option(
        False, "--always-download", help="Refresh the cached installer script"
    ),
    force: bool = typer.Option(False, "--force", help="Install even if already present"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Let the installer print its plan"),
) -> None:
    """Install the dotnet CLI/SDK (skipped when the pinned version is present)."""
    ctx = build_context()
    service = DotnetService(
        console=ctx.console,
        config=ctx.config,
        platform=ctx.platform,
    )

    if preset is not None:
        presets = SdkVersions.names()
        if preset not in presets:
            user_error(ctx, f"unknown preset '{preset}' (available: {', '.join(presets)})")
        base = presets[preset]
    else:
        defaults = service.default_install_options()
        base = CliInstallOptions(
            version=_version(version),
            channel=channel,
            architecture=architecture,
            installer_branch=branch or defaults.installer_branch,
            custom_install_dir=defaults.custom_install_dir,
            timeout=defaults.timeout,
        )

    options = base.with_(
        debug_symbols=debug_symbols,
        always_download=always_download,
        dry_run=dry_run,
    )
    if install_dir is not None:
        options = options.with_(custom_install_dir=install_dir.expanduser())

    if preset is not None:
        result = service.install_sdk(options, force=force)
    else:
        result = service.install_cli(options.with_(force_install=force))

    status = exit_on_error(result, ctx)
    installed_in = (
        options.custom_install_dir
        or ctx.config.dotnet.dir
        or default_dotnet_dir(ctx.platform)
    )
    if status == InstallStatus.ALREADY_INSTALLED:
        ctx.console.success(f"dotnet already installed in {installed_in}")
    else:
        ctx.console.success(f"dotnet installed in {installed_in}")


def sdk_version(
    path: Path = typer.Argument(Path("global.json"), help="global.json to read"),
) -> None:
    """Print sdk.version from a global.json file."""
    ctx = build_context()
    version = exit_on_error(global_json_sdk(path), ctx)
    ctx.console.print(version)
