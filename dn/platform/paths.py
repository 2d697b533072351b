"""Default tool locations derived from the environment.

These values seed the option records (`DotnetOptions`, `DnvmOptions`);
callers override them per call, and `dn.toml` overrides them per project.
Nothing here is cached: the environment is read each time a default
record is built.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from .detection import Platform, detect_platform

__all__ = [
    "DOTNET_ROOT_ENV",
    "home",
    "default_dotnet_dir",
    "default_dnx_home",
    "default_installer_cache",
]

# Install-root override read when building default options.
DOTNET_ROOT_ENV = "DOTNET_ROOT"


def home(platform: Platform | None = None) -> Path:
    """User home directory (USERPROFILE on Windows, HOME elsewhere)."""
    platform = platform or detect_platform()
    var = "USERPROFILE" if platform.is_windows else "HOME"
    value = os.environ.get(var)
    if value:
        return Path(value)
    return Path.home()


def default_dotnet_dir(platform: Platform | None = None) -> Path:
    """Directory the dotnet CLI is installed into by default.

    Order: $DOTNET_ROOT, then %LocalAppData%\\Microsoft\\dotnet on Windows
    or ~/.dotnet elsewhere (the install scripts' own defaults).
    """
    platform = platform or detect_platform()
    root = os.environ.get(DOTNET_ROOT_ENV)
    if root:
        return Path(root)

    if platform.is_windows:
        local_app_data = os.environ.get("LOCALAPPDATA")
        base = Path(local_app_data) if local_app_data else home(platform) / "AppData" / "Local"
        return base / "Microsoft" / "dotnet"
    return home(platform) / ".dotnet"


def default_dnx_home(platform: Platform | None = None) -> Path:
    """DNX user home (~/.dnx)."""
    return home(platform) / ".dnx"


def default_installer_cache() -> Path:
    """Directory where downloaded installer scripts are kept."""
    return Path(tempfile.gettempdir())
