"""Tool bootstrap through platform installer scripts.

ToolInstaller makes sure a tool is present before any command runs:

- target present and not forced: nothing happens (no download, no spawn)
- otherwise: fetch the installer script (cached), run it through the
  platform shell
- installer exits nonzero: the cached script is redownloaded once so the
  next attempt starts from a fresh copy, and the install fails with the
  installer's exit code. The install itself is not retried.
"""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path

from dn.core.result import Err, Ok, Result
from dn.dotnet.errors import InstallFailed
from dn.output.console import ConsoleProtocol, Style
from dn.platform.process import ProcessError, ProcessRunner
from dn.platform.shell import InstallerShell
from dn.tools.download import InstallerCache, InstallerScript
from dn.tools.http import HttpError

__all__ = [
    "DOTNET_INSTALL_DIR_ENV",
    "InstallStatus",
    "InstallError",
    "ToolInstaller",
    "dotnet_install_script",
    "dnvm_install_script",
]

# Read by dotnet-install.{ps1,sh}; only ever set in the installer's own environment.
DOTNET_INSTALL_DIR_ENV = "DOTNET_INSTALL_DIR"

_DOTNET_INSTALLER_URL = (
    "https://raw.githubusercontent.com/dotnet/cli/{branch}/scripts/obtain/dotnet-install{suffix}"
)
_DNVM_INSTALLER_URL = "https://raw.githubusercontent.com/aspnet/Home/{branch}/dnvminstall{suffix}"


def dotnet_install_script(branch: str, shell: InstallerShell) -> InstallerScript:
    """dotnet-install script published on a dotnet/cli branch."""
    return InstallerScript(
        name="dotnet-install",
        source_id=branch,
        url=_DOTNET_INSTALLER_URL.format(branch=branch, suffix=shell.script_suffix),
        suffix=shell.script_suffix,
    )


def dnvm_install_script(shell: InstallerShell, branch: str = "dev") -> InstallerScript:
    return InstallerScript(
        name="dnvminstall",
        source_id=branch,
        url=_DNVM_INSTALLER_URL.format(branch=branch, suffix=shell.script_suffix),
        suffix=shell.script_suffix,
    )


class InstallStatus(Enum):
    ALREADY_INSTALLED = auto()
    INSTALLED = auto()

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


InstallError = InstallFailed | HttpError | ProcessError


class ToolInstaller:
    """Runs installer scripts, reusing cached copies.

    Usage:
        installer = ToolInstaller(cache=cache, runner=runner, console=console,
                                  shell=InstallerShell.BASH)
        installer.ensure_installed("dnvm", dnvm_path, dnvm_install_script(shell))
    """

    def __init__(
        self,
        *,
        cache: InstallerCache,
        runner: ProcessRunner,
        console: ConsoleProtocol,
        shell: InstallerShell,
    ) -> None:
        self._cache = cache
        self._runner = runner
        self._console = console
        self._shell = shell

    @property
    def shell(self) -> InstallerShell:
        return self._shell

    def ensure_installed(
        self,
        tool: str,
        target: Path | None,
        script: InstallerScript,
        install_args: str = "",
        *,
        force: bool = False,
        always_download: bool = False,
        working_dir: Path | None = None,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Result[InstallStatus, InstallError]:
        """Install `tool` unless `target` already exists.

        Args:
            tool: Tool name used in messages and failures
            target: Path whose presence proves the tool is installed; None
                when presence cannot be checked (the installer always runs)
            script: Installer script source
            install_args: Rendered installer arguments
            force: Run the installer even if target exists
            always_download: Refresh the cached script before running it
            working_dir: Installer working directory (default: cache dir)
            env: Complete installer environment (None inherits ours)
            timeout: Seconds before the installer is abandoned

        Returns:
            Ok(InstallStatus), or Err with InstallFailed / HttpError / ProcessError
        """
        if target is not None and target.exists() and not force:
            self._console.print(f"{tool}: already installed ({target})", Style.DIM)
            return Ok(InstallStatus.ALREADY_INSTALLED)

        fetched = self._cache.fetch(script, force=always_download)
        if isinstance(fetched, Err):
            return fetched
        if not fetched.value.from_cache:
            self._console.print(f"downloaded {tool} installer to {fetched.value.path}", Style.DIM)

        ran = self.run_installer(
            tool,
            fetched.value.path,
            install_args,
            working_dir=working_dir,
            env=env,
            timeout=timeout,
        )
        if isinstance(ran, Err):
            if isinstance(ran.error, InstallFailed):
                self._refresh_script(tool, script)
            return ran
        return Ok(InstallStatus.INSTALLED)

    def run_installer(
        self,
        tool: str,
        script_path: Path,
        install_args: str,
        *,
        working_dir: Path | None = None,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Result[None, InstallFailed | ProcessError]:
        """Run one installer script through the platform shell."""
        arguments = self._shell.command_arguments(script_path, install_args)
        self._console.print(f"{self._shell.executable} {arguments}", Style.DIM)

        result = self._runner.run(
            self._shell.executable,
            working_dir or script_path.parent,
            arguments,
            timeout=timeout,
            env=env,
        )
        if isinstance(result, Err):
            return result
        if not result.value.success:
            return Err(InstallFailed(tool=tool, exit_code=result.value.exit_code))
        return Ok(None)

    def _refresh_script(self, tool: str, script: InstallerScript) -> None:
        self._console.error(f"{tool} install failed, trying to redownload installer...")
        refreshed = self._cache.fetch(script, force=True)
        if isinstance(refreshed, Err):
            self._console.warning(f"installer redownload failed: {refreshed.error}")
