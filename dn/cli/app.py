from __future__ import annotations

import os
from pathlib import Path

import typer

from dn import __version__
from dn.cli.commands.dnx_cmd import dnx_app
from dn.cli.commands.dotnet_cmd import build, exec_cmd, msbuild, pack, publish, restore
from dn.cli.commands.install_cmd import install, sdk_version
from dn.cli.context import CONFIG_ENV
from dn.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(install)
app.command("sdk-version")(sdk_version)
app.command()(restore)
app.command()(build)
app.command()(pack)
app.command()(publish)
app.command()(msbuild)
app.command(
    "exec",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(exec_cmd)

# Sub-apps
app.add_typer(dnx_app, name="dnx", help="Legacy DNX tooling (dnvm/dnu).")


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="dn.toml to use (default: ./dn.toml when present)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: --config '{path}' does not exist", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        os.environ[CONFIG_ENV] = str(path.resolve())

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def main() -> None:
    app()
