"""Build helpers for the dotnet CLI and the legacy dnvm/dnu tools."""

__version__ = "0.3.0"
