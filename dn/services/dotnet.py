"""dotnet CLI service.

Install the CLI/SDK through the official dotnet-install script and run
its subcommands against a project:

    svc = DotnetService(console=RichConsole(), config=config)
    svc.install_sdk(SdkVersions.NETCORE_101)
    svc.restore("src/app/project.json")
    svc.pack("src/lib", PackOptions(version_suffix="beta1"))

Every subcommand resolves exactly one executable (`common.tool_path`)
and returns Ok(None) on exit code 0, Err(CommandFailed) otherwise.
"""

from __future__ import annotations

from dn.core.result import Err, Ok, Result
from dn.dotnet.args import (
    build_args,
    command_line,
    install_args,
    msbuild_args,
    pack_args,
    publish_args,
    restore_args,
    with_custom_params,
)
from dn.dotnet.errors import CommandFailed, DotnetError
from dn.dotnet.options import (
    DEFAULT_INSTALLER_BRANCH,
    BuildOptions,
    CliInstallOptions,
    DotnetOptions,
    MsBuildOptions,
    PackOptions,
    PublishOptions,
    RestoreOptions,
)
from dn.platform.paths import default_dotnet_dir
from dn.platform.process import ProcessError, ProcessResult, child_env
from dn.tools.installer import (
    DOTNET_INSTALL_DIR_ENV,
    InstallError,
    InstallStatus,
    dotnet_install_script,
)

from .base import BaseService

__all__ = ["DotnetService"]


class DotnetService(BaseService):
    """dotnet CLI install and subcommands."""

    # -------------------------------------------------------------------------
    # Defaults
    # -------------------------------------------------------------------------

    def default_options(self) -> DotnetOptions:
        """Common options from dn.toml, falling back to the environment."""
        return DotnetOptions(
            dotnet_dir=self._config.dotnet.dir or default_dotnet_dir(self._platform),
            timeout=self._config.process.timeout,
            platform=self._platform,
        )

    def default_install_options(self) -> CliInstallOptions:
        return CliInstallOptions(
            custom_install_dir=self._config.dotnet.dir,
            installer_branch=self._config.dotnet.installer_branch or DEFAULT_INSTALLER_BRANCH,
            timeout=self._config.process.timeout,
        )

    # -------------------------------------------------------------------------
    # Install
    # -------------------------------------------------------------------------

    def install_cli(
        self, options: CliInstallOptions | None = None
    ) -> Result[InstallStatus, InstallError]:
        """Install the dotnet CLI unless the pinned version is already present.

        A pinned version is found at `<install_dir>/sdk/<version>`. Floating
        versions (latest, lkg) always run the installer, which itself skips
        work when it is up to date.
        """
        opts = options or self.default_install_options()
        install_dir = opts.install_dir(self._platform)
        pinned = opts.pinned_version
        target = install_dir / "sdk" / pinned if pinned else None

        self._console.task_start("dotnet:install", str(install_dir))
        result = self._installer.ensure_installed(
            "dotnet",
            target,
            dotnet_install_script(opts.installer_branch, self._shell),
            install_args(opts, self._shell),
            force=opts.force_install,
            always_download=opts.always_download,
            env=child_env({DOTNET_INSTALL_DIR_ENV: str(install_dir)}),
            timeout=opts.timeout,
        )
        if isinstance(result, Ok):
            self._console.task_end("dotnet:install", str(install_dir))
        return result

    def install_sdk(
        self, preset: CliInstallOptions, *, force: bool = False
    ) -> Result[InstallStatus, InstallError]:
        """Install a preset (see SdkVersions) into the configured directory."""
        defaults = self.default_install_options()
        return self.install_cli(
            preset.with_(
                custom_install_dir=preset.custom_install_dir or defaults.custom_install_dir,
                timeout=preset.timeout if preset.timeout is not None else defaults.timeout,
                force_install=force or preset.force_install,
            )
        )

    # -------------------------------------------------------------------------
    # Generic passthrough
    # -------------------------------------------------------------------------

    def exec(
        self, args: str, options: DotnetOptions | None = None
    ) -> Result[ProcessResult, ProcessError]:
        """Run `dotnet <args> [custom params]` and return whatever it produced.

        A nonzero exit code is part of the Ok result; use `run` to treat it
        as a failure.
        """
        opts = options or self.default_options()
        return self._run(
            opts.tool_path,
            opts.working_dir,
            with_custom_params(args, opts.custom_params),
            timeout=opts.timeout,
        )

    def run(
        self, args: str, options: DotnetOptions | None = None
    ) -> Result[ProcessResult, DotnetError]:
        result = self.exec(args, options)
        if isinstance(result, Err):
            return result
        if not result.value.success:
            return Err(
                CommandFailed(tool="dotnet", subcommand="exec", exit_code=result.value.exit_code)
            )
        return result

    # -------------------------------------------------------------------------
    # Subcommands
    # -------------------------------------------------------------------------

    def restore(
        self, project: str, options: RestoreOptions | None = None
    ) -> Result[None, DotnetError]:
        opts = options or RestoreOptions(common=self.default_options())
        return self._subcommand("restore", project, restore_args(opts), opts.common)

    def pack(self, project: str, options: PackOptions | None = None) -> Result[None, DotnetError]:
        opts = options or PackOptions(common=self.default_options())
        return self._subcommand("pack", project, pack_args(opts), opts.common)

    def publish(
        self, project: str, options: PublishOptions | None = None
    ) -> Result[None, DotnetError]:
        opts = options or PublishOptions(common=self.default_options())
        return self._subcommand("publish", project, publish_args(opts), opts.common)

    def build(self, project: str, options: BuildOptions | None = None) -> Result[None, DotnetError]:
        opts = options or BuildOptions(common=self.default_options())
        return self._subcommand("build", project, build_args(opts), opts.common)

    def msbuild(
        self, project: str, options: MsBuildOptions | None = None
    ) -> Result[None, DotnetError]:
        opts = options or MsBuildOptions(common=self.default_options())
        return self._subcommand("msbuild", project, msbuild_args(opts), opts.common)

    def _subcommand(
        self, subcommand: str, project: str, flags: str, common: DotnetOptions
    ) -> Result[None, DotnetError]:
        arguments = with_custom_params(
            command_line(subcommand, project, flags), common.custom_params
        )
        return self._run_task(
            "dotnet",
            subcommand,
            project,
            common.tool_path,
            common.working_dir,
            arguments,
            timeout=common.timeout,
        )
