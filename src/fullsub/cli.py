"""Typer CLI entrypoints."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from fullsub.config import load_settings
from fullsub.core.errors import FullsubError
from fullsub.driver import ProgramResult, run_program
from fullsub.logging_utils import configure_logging

app = typer.Typer(
    name="fullsub",
    help="Evaluate and type check lambda terms with records and subtyping",
    add_completion=False,
)


def _format_error(exc: FullsubError) -> str:
    location = exc.location()
    where = f"{location[0]}:{location[1]}: " if location else ""
    # First line only; _report prints the detail lines as indented continuations.
    headline = exc.message.partition("\n")[0]
    return f"error: {where}{headline}"


def _report(program: ProgramResult) -> None:
    for result in program.results:
        if result.error is not None:
            typer.echo(_format_error(result.error), err=True)
            for line in result.error.message.splitlines()[1:]:
                typer.echo(f"  {line.strip()}", err=True)
        else:
            typer.echo(result.rendered)
    if not program.ok:
        raise typer.Exit(code=1)


def _run(source: str, *, typecheck: bool | None, log_level: str | None, evaluate: bool) -> None:
    settings = load_settings(typecheck=typecheck, log_level=log_level)
    configure_logging(settings.log_level)
    try:
        program = run_program(source, settings=settings, evaluate_terms=evaluate)
    except FullsubError as exc:
        exc.with_source(source)
        logger.info("program rejected: {}", exc)
        typer.echo(_format_error(exc), err=True)
        raise typer.Exit(code=1) from None
    _report(program)


@app.command()
def run(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True)],
    typecheck: Annotated[bool | None, typer.Option("--typecheck/--no-typecheck")] = None,
    log_level: Annotated[str | None, typer.Option("--log-level")] = None,
) -> None:
    """Type check and evaluate every statement in PATH."""

    _run(path.read_text(encoding="utf-8"), typecheck=typecheck, log_level=log_level, evaluate=True)


@app.command()
def check(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True)],
    log_level: Annotated[str | None, typer.Option("--log-level")] = None,
) -> None:
    """Type check every statement in PATH without evaluating."""

    _run(path.read_text(encoding="utf-8"), typecheck=True, log_level=log_level, evaluate=False)


@app.command("eval")
def eval_source(
    source: Annotated[str, typer.Argument(help="Program text, e.g. 'succ 0;'")],
    typecheck: Annotated[bool | None, typer.Option("--typecheck/--no-typecheck")] = None,
    log_level: Annotated[str | None, typer.Option("--log-level")] = None,
) -> None:
    """Type check and evaluate an inline program."""

    _run(source, typecheck=typecheck, log_level=log_level, evaluate=True)


def main() -> None:
    app()


__all__ = ["app", "main"]
