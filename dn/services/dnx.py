"""Legacy DNX tooling: dnvm (runtime manager) and dnu (utility).

dnu is never invoked directly; it runs inside a runtime selected through
`dnvm exec <version-or-alias> dnu ...`.

On Windows dnvm is `dnvm.cmd`. Elsewhere `dnvm.sh` only defines a shell
function, so it is sourced by bash first and the dnvm arguments follow
the script as positional parameters:

    bash -c 'source <home>/dnvm/dnvm.sh && dnvm "$@"' dnvm <args>

The rendered arguments are split by the process runner like any other
tool's, so quoted values such as `--out "my dir"` stay one argument.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from dn.core.result import Err, Result
from dn.dotnet.args import command_line, dnu_pack_args, dnu_publish_args, dnvm_install_args
from dn.dotnet.dnx_options import (
    DnuPackOptions,
    DnuPublishOptions,
    DnuRestoreOptions,
    DnvmInstallOptions,
    DnvmOptions,
    DnvmRuntimeOptions,
    dnvm_path,
)
from dn.dotnet.errors import DotnetError
from dn.platform.detection import Platform
from dn.platform.paths import default_dnx_home
from dn.platform.process import child_env
from dn.tools.installer import InstallError, InstallStatus, dnvm_install_script

from .base import BaseService

__all__ = ["DnxService", "DNX_BUILD_VERSION_ENV", "dnvm_invocation"]

DNX_BUILD_VERSION_ENV = "DNX_BUILD_VERSION"


def dnvm_invocation(tool_path: Path, args: str, platform: Platform) -> tuple[str, str]:
    """Executable and argument string that run `dnvm <args>`."""
    if platform.is_windows:
        return str(tool_path), args
    script = f'source {shlex.quote(str(tool_path))} && dnvm "$@"'
    head = shlex.join(["-c", script, "dnvm"])
    return "bash", (f"{head} {args}" if args.strip() else head)


def _first_word(args: str) -> str:
    parts = args.split(maxsplit=1)
    return parts[0] if parts else ""


class DnxService(BaseService):
    """dnvm/dnu commands, installing dnvm on first use when allowed."""

    def default_dnvm_options(self) -> DnvmOptions:
        home = self._config.dnx.home or default_dnx_home(self._platform)
        return DnvmOptions(
            tool_path=dnvm_path(home, self._platform),
            timeout=self._config.process.timeout,
        )

    def _runtime_options(self, options: DnvmRuntimeOptions | None) -> DnvmRuntimeOptions:
        return options or DnvmRuntimeOptions(dnvm=self.default_dnvm_options())

    # -------------------------------------------------------------------------
    # dnvm
    # -------------------------------------------------------------------------

    def dnvm_tool_install(
        self, force: bool = False, options: DnvmOptions | None = None
    ) -> Result[InstallStatus, InstallError]:
        """Install dnvm unless its entry point exists; force also refreshes the script."""
        opts = options or self.default_dnvm_options()
        return self._installer.ensure_installed(
            "dnvm",
            opts.tool_path,
            dnvm_install_script(self._shell),
            force=force,
            always_download=force,
            timeout=opts.timeout,
        )

    def dnvm(self, args: str, options: DnvmOptions | None = None) -> Result[None, DotnetError]:
        """Run `dnvm <args>`; the first word of args names the task."""
        opts = options or self.default_dnvm_options()
        return self._dnvm("dnvm", _first_word(args), args, opts, target=args)

    def dnvm_install(self, options: DnvmInstallOptions | None = None) -> Result[None, DotnetError]:
        opts = options or DnvmInstallOptions(dnvm=self.default_dnvm_options())
        args = f"install {dnvm_install_args(opts)}"
        return self._dnvm("dnvm", "install", args, opts.dnvm, target=opts.version_or_alias)

    def dnvm_upgrade(self, options: DnvmOptions | None = None) -> Result[None, DotnetError]:
        opts = options or self.default_dnvm_options()
        return self._dnvm("dnvm", "upgrade", "upgrade", opts, target="")

    def dnvm_update_self(self, options: DnvmOptions | None = None) -> Result[None, DotnetError]:
        opts = options or self.default_dnvm_options()
        return self._dnvm("dnvm", "update-self", "update-self", opts, target="")

    def dnvm_exec(
        self, command: str, options: DnvmRuntimeOptions | None = None
    ) -> Result[None, DotnetError]:
        """Run `command` with the runtime selected by options.version_or_alias."""
        opts = self._runtime_options(options)
        args = f"exec {opts.version_or_alias} {command}"
        return self._dnvm("dnvm", "exec", args, opts.dnvm, target=command)

    # -------------------------------------------------------------------------
    # dnu
    # -------------------------------------------------------------------------

    def dnu(
        self, command: str, options: DnvmRuntimeOptions | None = None
    ) -> Result[None, DotnetError]:
        return self._dnu(_first_word(command), command, self._runtime_options(options), target="")

    def dnu_restore(
        self, project: str, options: DnuRestoreOptions | None = None
    ) -> Result[None, DotnetError]:
        runtime = self._runtime_options(options.runtime if options else None)
        return self._dnu("restore", f"restore {project}", runtime, target=project)

    def dnu_publish(
        self, project: str, options: DnuPublishOptions | None = None
    ) -> Result[None, DotnetError]:
        opts = options or DnuPublishOptions(runtime=self._runtime_options(None))
        command = command_line("publish", project, dnu_publish_args(opts))
        return self._dnu("publish", command, opts.runtime, target=project)

    def dnu_pack(
        self, project: str, options: DnuPackOptions | None = None
    ) -> Result[None, DotnetError]:
        opts = options or DnuPackOptions(runtime=self._runtime_options(None))
        command = command_line("pack", project, dnu_pack_args(opts))
        return self._dnu("pack", command, opts.runtime, target=project)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _dnu(
        self, subcommand: str, command: str, runtime: DnvmRuntimeOptions, *, target: str
    ) -> Result[None, DotnetError]:
        args = f"exec {runtime.version_or_alias} dnu {command}"
        return self._dnvm("dnu", subcommand, args, runtime.dnvm, target=target)

    def _dnvm(
        self, tool: str, subcommand: str, args: str, options: DnvmOptions, *, target: str
    ) -> Result[None, DotnetError]:
        if options.auto_install:
            installed = self.dnvm_tool_install(options=options)
            if isinstance(installed, Err):
                return installed

        executable, arguments = dnvm_invocation(options.tool_path, args, self._platform)
        env = child_env({DNX_BUILD_VERSION_ENV: options.build_version})
        return self._run_task(
            tool,
            subcommand,
            target,
            executable,
            options.working_dir,
            arguments,
            timeout=options.timeout,
            env=env,
        )
