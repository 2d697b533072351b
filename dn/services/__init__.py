"""Tool services.

Services coordinate option records (dotnet/), installers (tools/) and
child processes (platform/), reporting through the console (output/).
"""

from dn.services.dnx import DnxService
from dn.services.dotnet import DotnetService

__all__ = [
    "DnxService",
    "DotnetService",
]
