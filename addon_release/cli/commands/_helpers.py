"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from addon_release.core.errors import ErrorCode


def exit_release(err: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=int(code))
