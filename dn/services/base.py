"""Shared wiring for the tool services."""

from __future__ import annotations

from pathlib import Path

from dn.core.config import Config
from dn.core.result import Err, Ok, Result
from dn.dotnet.errors import CommandFailed, DotnetError
from dn.output.console import ConsoleProtocol
from dn.platform.detection import Platform, detect_platform
from dn.platform.paths import default_installer_cache
from dn.platform.process import ProcessError, ProcessResult, ProcessRunner, SubprocessRunner
from dn.platform.shell import InstallerShell
from dn.tools.download import InstallerCache
from dn.tools.http import HttpClient, RealHttpClient
from dn.tools.installer import ToolInstaller


class BaseService:
    """Holds the console, process runner and installer every service needs.

    Every collaborator can be injected; anything left out is built from the
    config and the current platform.
    """

    def __init__(
        self,
        *,
        console: ConsoleProtocol,
        config: Config | None = None,
        runner: ProcessRunner | None = None,
        http: HttpClient | None = None,
        platform: Platform | None = None,
        cache_dir: Path | None = None,
    ) -> None:
        self._console = console
        self._config = config or Config()
        self._platform = platform or detect_platform()
        self._runner = runner or SubprocessRunner(console, platform=self._platform)
        self._shell = InstallerShell.for_platform(self._platform)
        cache = InstallerCache(
            http or RealHttpClient(),
            cache_dir or self._config.dotnet.installer_cache or default_installer_cache(),
        )
        self._installer = ToolInstaller(
            cache=cache, runner=self._runner, console=console, shell=self._shell
        )

    @property
    def installer(self) -> ToolInstaller:
        return self._installer

    def _run(
        self,
        executable: Path | str,
        working_dir: Path,
        arguments: str,
        *,
        timeout: float | None,
        env: dict[str, str] | None = None,
    ) -> Result[ProcessResult, ProcessError]:
        return self._runner.run(executable, working_dir, arguments, timeout=timeout, env=env)

    def _run_task(
        self,
        tool: str,
        subcommand: str,
        target: str,
        executable: Path | str,
        working_dir: Path,
        arguments: str,
        *,
        timeout: float | None,
        env: dict[str, str] | None = None,
    ) -> Result[None, DotnetError]:
        """Run one announced tool task; a nonzero exit becomes CommandFailed."""
        task = f"{tool}:{subcommand}"
        self._console.task_start(task, target)

        result = self._run(executable, working_dir, arguments, timeout=timeout, env=env)
        if isinstance(result, Err):
            return result
        if not result.value.success:
            return Err(
                CommandFailed(tool=tool, subcommand=subcommand, exit_code=result.value.exit_code)
            )

        self._console.task_end(task, target)
        return Ok(None)
