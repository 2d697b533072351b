from __future__ import annotations

from pathlib import Path

import pytest
import typer

from dn.cli.context import CLIContext
from dn.core.config import Config, DotnetConfig
from dn.core.errors import ErrorCode
from dn.dotnet.options import CliArchitecture, CliChannel
from dn.output.console import MockConsole
from dn.platform.detection import Platform
from dn.platform.process import MockProcessRunner
from dn.platform.shell import InstallerShell
from dn.services.dotnet import DotnetService
from dn.tools.http import MockHttpClient
from dn.tools.installer import dotnet_install_script


@pytest.fixture
def dotnet_dir(tmp_path: Path) -> Path:
    return tmp_path / "dotnet"


@pytest.fixture
def runner() -> MockProcessRunner:
    return MockProcessRunner()


@pytest.fixture
def ctx(dotnet_dir: Path) -> CLIContext:
    return CLIContext(
        platform=Platform.LINUX,
        config=Config(dotnet=DotnetConfig(dir=dotnet_dir)),
        console=MockConsole(),
    )


@pytest.fixture(autouse=True)
def _patch(
    tmp_path: Path, ctx: CLIContext, runner: MockProcessRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    import dn.cli.commands.install_cmd as install_cmd

    http = MockHttpClient()
    for branch in ("rel/1.0.0", "rel/1.0.1"):
        http.set_download(dotnet_install_script(branch, InstallerShell.BASH).url, b"")

    def fake_service(**kwargs: object) -> DotnetService:
        return DotnetService(
            runner=runner,
            http=http,
            cache_dir=tmp_path / "cache",
            **kwargs,  # pyright: ignore[reportArgumentType]
        )

    monkeypatch.setattr(install_cmd, "build_context", lambda: ctx)
    monkeypatch.setattr(install_cmd, "DotnetService", fake_service)


def _install(**overrides: object) -> None:
    import dn.cli.commands.install_cmd as install_cmd

    kwargs: dict[str, object] = {
        "preset": None,
        "version": "latest",
        "channel": CliChannel.PREVIEW,
        "architecture": CliArchitecture.AUTO,
        "install_dir": None,
        "branch": None,
        "debug_symbols": False,
        "always_download": False,
        "force": False,
        "dry_run": False,
    }
    kwargs.update(overrides)
    install_cmd.install(**kwargs)  # pyright: ignore[reportArgumentType]


def _messages(ctx: CLIContext) -> list[str]:
    assert isinstance(ctx.console, MockConsole)
    return ctx.console.messages


class TestInstall:
    def test_latest_runs_installer(
        self, ctx: CLIContext, dotnet_dir: Path, runner: MockProcessRunner
    ) -> None:
        _install()

        call = runner.calls[0]
        assert call.executable == "bash"
        assert '--version "latest"' in call.arguments
        assert call.env is not None
        assert call.env["DOTNET_INSTALL_DIR"] == str(dotnet_dir)
        assert _messages(ctx)[-1] == f"OK dotnet installed in {dotnet_dir}"

    def test_preset_already_installed(
        self, ctx: CLIContext, dotnet_dir: Path, runner: MockProcessRunner
    ) -> None:
        (dotnet_dir / "sdk" / "1.0.1").mkdir(parents=True)

        _install(preset="netcore-1.0.1")

        assert runner.calls == []
        assert _messages(ctx)[-1] == f"OK dotnet already installed in {dotnet_dir}"

    def test_preset_force(self, dotnet_dir: Path, runner: MockProcessRunner) -> None:
        (dotnet_dir / "sdk" / "1.0.1").mkdir(parents=True)

        _install(preset="netcore-1.0.1", force=True)

        assert len(runner.calls) == 1
        assert '--version "1.0.1"' in runner.calls[0].arguments

    def test_unknown_preset(self, ctx: CLIContext, runner: MockProcessRunner) -> None:
        with pytest.raises(typer.Exit) as exc:
            _install(preset="netcore-9")

        assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
        assert runner.calls == []
        assert "unknown preset 'netcore-9'" in _messages(ctx)[0]

    def test_install_dir_override(self, tmp_path: Path, runner: MockProcessRunner) -> None:
        elsewhere = tmp_path / "elsewhere"

        _install(version="1.0.0", install_dir=elsewhere)

        assert runner.calls[0].env is not None
        assert runner.calls[0].env["DOTNET_INSTALL_DIR"] == str(elsewhere)

    def test_installer_failure(self, ctx: CLIContext, runner: MockProcessRunner) -> None:
        runner.push_exit_code(1)

        with pytest.raises(typer.Exit) as exc:
            _install()

        assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)


class TestSdkVersion:
    def test_prints_version(self, tmp_path: Path, ctx: CLIContext) -> None:
        import dn.cli.commands.install_cmd as install_cmd

        path = tmp_path / "global.json"
        path.write_text('{"sdk": {"version": "1.0.0-preview2-003121"}}', encoding="utf-8")

        install_cmd.sdk_version(path=path)

        assert _messages(ctx) == ["1.0.0-preview2-003121"]

    def test_missing_file(self, tmp_path: Path) -> None:
        import dn.cli.commands.install_cmd as install_cmd

        with pytest.raises(typer.Exit) as exc:
            install_cmd.sdk_version(path=tmp_path / "global.json")

        assert exc.value.exit_code == int(ErrorCode.CONFIG_ERROR)
