"""Platform detection, default paths and child processes."""

from .detection import (
    Platform,
    detect_platform,
    is_windows,
)
from .process import (
    MockProcessRunner,
    ProcessError,
    ProcessResult,
    ProcessRunner,
    SubprocessRunner,
)
from .shell import InstallerShell

__all__ = [
    # detection
    "Platform",
    "detect_platform",
    "is_windows",
    # process
    "MockProcessRunner",
    "ProcessError",
    "ProcessResult",
    "ProcessRunner",
    "SubprocessRunner",
    # shell
    "InstallerShell",
]
