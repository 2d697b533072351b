"""Installer script cache.

Install scripts are kept on disk under a name derived from a hash of the
script's source identifier (for the dotnet CLI, the branch it is published
from), e.g. `dotnet-install-1a2b3c4d.ps1`. A cached copy is reused until a
caller forces a refresh, so repeated installs in one build do not hit the
network.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from dn.core.result import Err, Ok, Result
from dn.tools.http import HttpError

if TYPE_CHECKING:
    from dn.tools.http import HttpClient

__all__ = ["InstallerScript", "CachedScript", "InstallerCache"]


@dataclass(frozen=True, slots=True)
class InstallerScript:
    """Where an installer script comes from.

    Attributes:
        name: file stem, e.g. "dotnet-install"
        source_id: identifier hashed into the cache name (branch, channel)
        url: HTTPS location of the script
        suffix: ".ps1" or ".sh"
    """

    name: str
    source_id: str
    url: str
    suffix: str


@dataclass(frozen=True, slots=True)
class CachedScript:
    """A script ready to run.

    Attributes:
        path: Path of the cached script
        from_cache: True if no download happened
    """

    path: Path
    from_cache: bool


class InstallerCache:
    """Downloads installer scripts and keeps them in a cache directory."""

    def __init__(self, http: HttpClient, cache_dir: Path) -> None:
        self._http = http
        self._cache_dir = cache_dir

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def cache_key(self, script: InstallerScript) -> str:
        digest = hashlib.sha256(script.source_id.encode("utf-8")).hexdigest()[:8]
        return f"{script.name}-{digest}{script.suffix}"

    def cache_path(self, script: InstallerScript) -> Path:
        return self._cache_dir / self.cache_key(script)

    def is_cached(self, script: InstallerScript) -> bool:
        return self.cache_path(script).is_file()

    def fetch(
        self, script: InstallerScript, *, force: bool = False
    ) -> Result[CachedScript, HttpError]:
        """Return the cached script, downloading it if absent or forced.

        A failed download leaves no partial file behind.
        """
        path = self.cache_path(script)
        if not force and path.is_file():
            return Ok(CachedScript(path=path, from_cache=True))

        self._cache_dir.mkdir(parents=True, exist_ok=True)
        result = self._http.download(script.url, path)
        if isinstance(result, Err):
            path.unlink(missing_ok=True)
            return result
        return Ok(CachedScript(path=path, from_cache=False))
