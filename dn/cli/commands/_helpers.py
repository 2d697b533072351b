"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import typer

from dn.core.errors import ErrorCode
from dn.core.result import Err, Result
from dn.dotnet.errors import DotnetError
from dn.dotnet.options import BuildConfiguration, Configuration, CustomConfiguration
from dn.output.errors import dotnet_error_exit_code, print_dotnet_error

if TYPE_CHECKING:
    from dn.cli.context import CLIContext


def exit_on_error[T](result: Result[T, DotnetError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the failure and exit with its code.

    Replaces the common pattern:
        match result:
            case Err(e):
                print_dotnet_error(e, ctx.console)
                raise typer.Exit(code=dotnet_error_exit_code(e))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        print_dotnet_error(result.error, ctx.console)
        raise typer.Exit(code=dotnet_error_exit_code(result.error))
    return result.value


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)


def user_error(ctx: CLIContext, message: str) -> NoReturn:
    ctx.console.error(message)
    raise typer.Exit(code=int(ErrorCode.USER_ERROR))


def parse_configuration(value: str) -> Configuration:
    """Map "Debug"/"Release" to the built-in configurations.

    Anything else is a custom configuration, passed through untouched.
    """
    try:
        return BuildConfiguration(value)
    except ValueError:
        return CustomConfiguration(value)


def resolve_working_dir(path: Path | None) -> Path:
    return path.expanduser().resolve() if path is not None else Path.cwd()
