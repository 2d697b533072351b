"""Tests for tools/download.py - installer script cache."""

import hashlib
from pathlib import Path

from dn.core.result import Err, Ok
from dn.tools.download import CachedScript, InstallerCache, InstallerScript
from dn.tools.http import HttpError, MockHttpClient

SCRIPT = InstallerScript(
    name="dotnet-install",
    source_id="rel/1.0.0",
    url="https://example.com/rel/1.0.0/dotnet-install.sh",
    suffix=".sh",
)


class TestCacheKey:
    """Tests for cache file naming."""

    def test_key_is_name_hash_suffix(self, tmp_path: Path) -> None:
        cache = InstallerCache(MockHttpClient(), tmp_path)
        digest = hashlib.sha256(b"rel/1.0.0").hexdigest()[:8]

        assert cache.cache_key(SCRIPT) == f"dotnet-install-{digest}.sh"
        assert cache.cache_path(SCRIPT) == tmp_path / f"dotnet-install-{digest}.sh"

    def test_key_differs_per_source(self, tmp_path: Path) -> None:
        cache = InstallerCache(MockHttpClient(), tmp_path)
        other = InstallerScript(
            name="dotnet-install", source_id="rel/1.0.1", url=SCRIPT.url, suffix=".sh"
        )

        assert cache.cache_key(SCRIPT) != cache.cache_key(other)


class TestFetch:
    """Tests for InstallerCache.fetch()."""

    def test_downloads_when_absent(self, tmp_path: Path) -> None:
        client = MockHttpClient()
        client.set_download(SCRIPT.url, b"echo install")
        cache = InstallerCache(client, tmp_path / "cache")

        result = cache.fetch(SCRIPT)

        assert result == Ok(CachedScript(path=cache.cache_path(SCRIPT), from_cache=False))
        assert cache.is_cached(SCRIPT)
        assert len(client.calls) == 1

    def test_reuses_cached_copy(self, tmp_path: Path) -> None:
        client = MockHttpClient()
        client.set_download(SCRIPT.url, b"echo install")
        cache = InstallerCache(client, tmp_path)

        cache.fetch(SCRIPT)
        result = cache.fetch(SCRIPT)

        assert isinstance(result, Ok)
        assert result.value.from_cache
        assert len(client.calls) == 1

    def test_force_redownloads(self, tmp_path: Path) -> None:
        client = MockHttpClient()
        client.set_download(SCRIPT.url, b"v1")
        cache = InstallerCache(client, tmp_path)
        cache.fetch(SCRIPT)

        client.set_download(SCRIPT.url, b"v2")
        result = cache.fetch(SCRIPT, force=True)

        assert isinstance(result, Ok)
        assert not result.value.from_cache
        assert result.value.path.read_bytes() == b"v2"
        assert len(client.calls) == 2

    def test_failed_download_leaves_no_file(self, tmp_path: Path) -> None:
        client = MockHttpClient()
        client.set_download(SCRIPT.url, b"old")
        cache = InstallerCache(client, tmp_path)
        cache.fetch(SCRIPT)

        error = HttpError(url=SCRIPT.url, status=503, message="Service Unavailable")
        client.set_download(SCRIPT.url, error)
        result = cache.fetch(SCRIPT, force=True)

        assert result == Err(error)
        assert not cache.is_cached(SCRIPT)
