"""Legacy DNX commands - dnvm/dnu."""

from __future__ import annotations

from pathlib import Path

import typer

from dn.cli.commands._helpers import exit_on_error, resolve_working_dir
from dn.cli.context import CLIContext, build_context
from dn.dotnet.dnx_options import (
    DnuRestoreOptions,
    DnvmInstallOptions,
    DnvmOptions,
    DnvmRuntimeOptions,
    RuntimeArchitecture,
)
from dn.services.dnx import DnxService
from dn.tools.installer import InstallStatus


dnx_app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _service(ctx: CLIContext) -> DnxService:
    return DnxService(
        console=ctx.console,
        config=ctx.config,
        platform=ctx.platform,
    )


def _dnvm_options(
    service: DnxService, working_dir: Path | None, build_version: str | None = None
) -> DnvmOptions:
    return service.default_dnvm_options().with_(
        working_dir=resolve_working_dir(working_dir),
        build_version=build_version,
    )


@dnx_app.command("bootstrap")
def bootstrap(
    force: bool = typer.Option(False, "--force", help="Reinstall dnvm even if present"),
) -> None:
    """Install dnvm itself."""
    ctx = build_context()
    status = exit_on_error(_service(ctx).dnvm_tool_install(force=force), ctx)
    if status == InstallStatus.ALREADY_INSTALLED:
        ctx.console.success("dnvm already installed")
    else:
        ctx.console.success("dnvm installed")


@dnx_app.command("install")
def install(
    version: str = typer.Argument("latest", help="Runtime version or alias"),
    arch: RuntimeArchitecture | None = typer.Option(
        None, "--arch", "-a", help="Runtime architecture", show_default=False
    ),
    working_dir: Path | None = typer.Option(None, "--working-dir", "-C", show_default=False),
) -> None:
    """Install a DNX runtime with dnvm."""
    ctx = build_context()
    service = _service(ctx)
    options = DnvmInstallOptions(
        dnvm=_dnvm_options(service, working_dir),
        version_or_alias=version,
        architecture=arch,
    )
    exit_on_error(service.dnvm_install(options), ctx)


@dnx_app.command("upgrade")
def upgrade(
    working_dir: Path | None = typer.Option(None, "--working-dir", "-C", show_default=False),
) -> None:
    """Install the latest runtime and make it the default."""
    ctx = build_context()
    service = _service(ctx)
    exit_on_error(service.dnvm_upgrade(_dnvm_options(service, working_dir)), ctx)


@dnx_app.command("restore")
def restore(
    project: str = typer.Argument(".", help="Project directory"),
    runtime: str = typer.Option("default", "--runtime", help="Runtime version or alias"),
    build_version: str | None = typer.Option(
        None,
        "--build-version",
        help="Value substituted for '*' version suffixes (DNX_BUILD_VERSION)",
        show_default=False,
    ),
    working_dir: Path | None = typer.Option(None, "--working-dir", "-C", show_default=False),
) -> None:
    """Restore packages with `dnu restore`."""
    ctx = build_context()
    service = _service(ctx)
    options = DnuRestoreOptions(
        runtime=DnvmRuntimeOptions(
            dnvm=_dnvm_options(service, working_dir, build_version),
            version_or_alias=runtime,
        )
    )
    exit_on_error(service.dnu_restore(project, options), ctx)
