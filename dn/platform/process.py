"""Child process execution with captured, streamed output.

The runner takes the executable and a single rendered argument string
(the same text a user would type after the executable name), runs it to
completion and returns a ProcessResult. A nonzero exit code is *not* an
error at this level; it is returned for the calling operation to judge.
Only a timeout or a failure to spawn produces Err(ProcessError).

Usage:
    runner = SubprocessRunner(console)
    match runner.run(dotnet, Path("."), "restore app.csproj "):
        case Ok(result) if result.success:
            ...
        case Ok(result):
            print(f"exit {result.exit_code}")
        case Err(error):
            print(error)
"""

from __future__ import annotations

import os
import shlex
import subprocess
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Protocol

from dn.core.result import Err, Ok, Result
from dn.output.console import ConsoleProtocol

from .detection import Platform, detect_platform

__all__ = [
    "ProcessCall",
    "ProcessError",
    "ProcessResult",
    "ProcessRunner",
    "MockProcessRunner",
    "SubprocessRunner",
    "build_command",
    "child_env",
]

# How long to wait for the output pumps once a timed-out child was killed.
_PUMP_JOIN_AFTER_KILL_SECONDS = 2.0
# Grandchildren (build servers, MSBuild nodes) may keep the pipes open
# after the child exits; output they write later is not captured.
_PUMP_JOIN_AFTER_EXIT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Outcome of one completed child process.

    Attributes:
        exit_code: Process exit code.
        messages: Lines written to stdout, in order.
        errors: Lines written to stderr, in order.
    """

    exit_code: int
    messages: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()

    @property
    def success(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A child process that could not be run to completion.

    Attributes:
        command: The command that was executed.
        returncode: -1 (timeout or spawn failure).
        stdout: Output captured before the failure.
        stderr: Error details.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def message(self) -> str:
        return f"{self}: {self.stderr}" if self.stderr else str(self)

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


class ProcessRunner(Protocol):
    """Protocol for running a tool (injectable for tests)."""

    def run(
        self,
        executable: Path | str,
        working_dir: Path,
        arguments: str,
        *,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> Result[ProcessResult, ProcessError]:
        """Run executable with a rendered argument string.

        Args:
            executable: Program to run.
            working_dir: Working directory of the child.
            arguments: Rendered argument string.
            timeout: Seconds to wait before abandoning the child (None = forever).
            env: Complete child environment (None inherits ours).

        Returns:
            Ok(ProcessResult) whatever the exit code, Err(ProcessError) on
            timeout or spawn failure.
        """
        ...


def build_command(
    executable: Path | str, arguments: str, platform: Platform
) -> list[str] | str:
    """Turn executable + argument string into something Popen accepts.

    Windows receives a raw command line (CreateProcess parses it the way the
    tools expect). Elsewhere the string is split with POSIX shell rules, so
    `--output "./out dir"` stays one argument.

    Raises:
        ValueError: The argument string has unbalanced quotes (POSIX only).
    """
    if platform.is_windows:
        head = subprocess.list2cmdline([str(executable)])
        return f"{head} {arguments}" if arguments.strip() else head
    return [str(executable), *shlex.split(arguments)]


def child_env(overrides: Mapping[str, str | None]) -> dict[str, str] | None:
    """Environment for one child process: ours plus overrides.

    Returns None (inherit unchanged) when there is nothing to add. The
    parent environment is never modified.
    """
    extra = {k: v for k, v in overrides.items() if v is not None}
    if not extra:
        return None
    return {**os.environ, **extra}


def _pump(stream: IO[str], sink: list[str], emit: Callable[[str], None]) -> None:
    with stream:
        for raw in stream:
            line = raw.rstrip("\r\n")
            sink.append(line)
            emit(line)


class SubprocessRunner:
    """ProcessRunner backed by subprocess.Popen.

    stdout and stderr are drained by one thread each, so ordering is kept
    within a stream but not across the two. Every line is surfaced to the
    console as soon as it arrives.
    """

    def __init__(self, console: ConsoleProtocol, *, platform: Platform | None = None) -> None:
        self._console = console
        self._platform = platform or detect_platform()

    def run(
        self,
        executable: Path | str,
        working_dir: Path,
        arguments: str,
        *,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> Result[ProcessResult, ProcessError]:
        command_tuple = (str(executable), *arguments.split())
        try:
            command = build_command(executable, arguments, self._platform)
        except ValueError as e:
            return Err(
                ProcessError(
                    command=command_tuple,
                    returncode=-1,
                    stdout="",
                    stderr=f"Invalid argument string: {e}",
                )
            )

        try:
            proc = subprocess.Popen(
                command,
                cwd=str(working_dir),
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            return Err(ProcessError(command=command_tuple, returncode=-1, stdout="", stderr=str(e)))

        messages: list[str] = []
        errors: list[str] = []
        assert proc.stdout is not None and proc.stderr is not None
        pumps = [
            threading.Thread(
                target=_pump, args=(proc.stdout, messages, self._console.stdout_line), daemon=True
            ),
            threading.Thread(
                target=_pump, args=(proc.stderr, errors, self._console.stderr_line), daemon=True
            ),
        ]
        for pump in pumps:
            pump.start()

        try:
            exit_code = proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
            for pump in pumps:
                pump.join(_PUMP_JOIN_AFTER_KILL_SECONDS)
            return Err(
                ProcessError(
                    command=command_tuple,
                    returncode=-1,
                    stdout="\n".join(messages),
                    stderr=f"Command timed out after {timeout}s",
                )
            )

        for pump in pumps:
            pump.join(_PUMP_JOIN_AFTER_EXIT_SECONDS)

        return Ok(
            ProcessResult(exit_code=exit_code, messages=tuple(messages), errors=tuple(errors))
        )


@dataclass(frozen=True, slots=True)
class ProcessCall:
    """One invocation recorded by MockProcessRunner."""

    executable: str
    working_dir: Path
    arguments: str
    timeout: float | None
    env: dict[str, str] | None


class MockProcessRunner:
    """ProcessRunner for tests.

    Results are served first from a FIFO queue, then from a default
    (exit code 0, no output).

    Usage:
        runner = MockProcessRunner()
        runner.push(ProcessResult(exit_code=1))
        service = DotnetService(console=MockConsole(), runner=runner)
        service.pack("lib.csproj")
        assert runner.calls[0].arguments.startswith("pack lib.csproj")
    """

    def __init__(self, default: ProcessResult | None = None) -> None:
        self._default = default or ProcessResult(exit_code=0)
        self._queue: list[ProcessResult | ProcessError] = []
        self.calls: list[ProcessCall] = []

    def push(self, response: ProcessResult | ProcessError) -> None:
        """Queue the response for the next call."""
        self._queue.append(response)

    def push_exit_code(self, exit_code: int) -> None:
        self._queue.append(ProcessResult(exit_code=exit_code))

    def run(
        self,
        executable: Path | str,
        working_dir: Path,
        arguments: str,
        *,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> Result[ProcessResult, ProcessError]:
        self.calls.append(
            ProcessCall(
                executable=str(executable),
                working_dir=working_dir,
                arguments=arguments,
                timeout=timeout,
                env=env,
            )
        )
        response = self._queue.pop(0) if self._queue else self._default
        if isinstance(response, ProcessError):
            return Err(response)
        return Ok(response)
