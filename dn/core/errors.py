"""Process exit codes used by the `dn` command line.

Library calls never exit; they return error values. The CLI maps those
values onto these codes so that a calling build script can tell an
installer problem from a failed compile.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    Values are part of the CLI contract and must stay stable:
    - 0: Success
    - 1: User error (bad arguments)
    - 2: Environment error (tool missing, installer failed, process timed out)
    - 3: Build error (a dotnet/dnu subcommand exited nonzero)
    - 4: Network error (installer script download failed)
    - 5: Config error (dn.toml or global.json unreadable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    CONFIG_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
