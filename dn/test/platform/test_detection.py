"""Tests for dn.platform.detection module."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import patch

import pytest

import dn.platform.detection as detection
from dn.platform.detection import Platform, detect_platform, is_windows


@pytest.fixture(autouse=True)
def clear_detection_caches() -> Iterator[None]:
    detect_platform.cache_clear()
    yield
    detect_platform.cache_clear()


class TestPlatformEnum:
    def test_str(self) -> None:
        assert str(Platform.LINUX) == "linux"
        assert str(Platform.WINDOWS) == "windows"

    def test_is_unix(self) -> None:
        assert Platform.LINUX.is_unix
        assert Platform.MACOS.is_unix
        assert not Platform.WINDOWS.is_unix

    def test_exe_name(self) -> None:
        assert Platform.WINDOWS.exe_name("dotnet") == "dotnet.exe"
        assert Platform.LINUX.exe_name("dotnet") == "dotnet"
        assert Platform.MACOS.exe_name("dotnet") == "dotnet"


class TestDetectPlatform:
    @pytest.mark.parametrize(
        ("sys_platform", "expected"),
        [
            ("linux", Platform.LINUX),
            ("darwin", Platform.MACOS),
            ("win32", Platform.WINDOWS),
            ("cygwin", Platform.WINDOWS),
            ("sunos5", Platform.UNKNOWN),
        ],
    )
    def test_detect(self, sys_platform: str, expected: Platform) -> None:
        with patch("dn.platform.detection._sys.platform", sys_platform):
            assert detect_platform() == expected

    def test_is_cached(self) -> None:
        assert detect_platform() is detect_platform()

    def test_is_windows(self) -> None:
        with patch("dn.platform.detection._sys.platform", "win32"):
            assert is_windows()

    def test_only_the_operating_system_is_detected(self) -> None:
        assert set(detection.__all__) == {"Platform", "detect_platform", "is_windows"}
