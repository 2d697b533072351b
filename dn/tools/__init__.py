"""Installer script download and caching.

`installer` is not re-exported here; import it as `dn.tools.installer`.
"""

from .download import CachedScript, InstallerCache, InstallerScript
from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient

__all__ = [
    # download
    "CachedScript",
    "InstallerCache",
    "InstallerScript",
    # http
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]
