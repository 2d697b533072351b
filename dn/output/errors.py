"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dn.core.errors import ErrorCode
from dn.dotnet.errors import CommandFailed, ConfigParseFailed, DotnetError, InstallFailed
from dn.output.console import Style
from dn.platform.process import ProcessError
from dn.tools.http import HttpError

if TYPE_CHECKING:
    from dn.output.console import ConsoleProtocol

__all__ = ["print_dotnet_error", "dotnet_error_exit_code"]


def print_dotnet_error(error: DotnetError, console: ConsoleProtocol) -> None:
    """Print a dotnet/DNX failure to console with appropriate formatting."""
    match error:
        case InstallFailed():
            console.error(error.message)
            console.print(f"hint: {error.hint}", Style.DIM)
        case CommandFailed():
            console.error(error.message)
        case ConfigParseFailed(path=path, reason=reason):
            console.error(f"invalid config: {path} ({reason})")
        case HttpError():
            console.error(f"download failed: {error}")
        case ProcessError():
            console.error(error.message)


def dotnet_error_exit_code(error: DotnetError) -> int:
    """Get exit code for a dotnet/DNX failure."""
    match error:
        case InstallFailed() | ProcessError():
            return int(ErrorCode.ENV_ERROR)
        case CommandFailed():
            return int(ErrorCode.BUILD_ERROR)
        case ConfigParseFailed():
            return int(ErrorCode.CONFIG_ERROR)
        case HttpError():
            return int(ErrorCode.NETWORK_ERROR)
    return int(ErrorCode.ENV_ERROR)
