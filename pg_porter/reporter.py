"""
Progress display and completion summary.

The poll loop only renders: it checks the completion signal, redraws a
rotating glyph on the current terminal line, and sleeps briefly. All work
happens on the background export task.
"""

from __future__ import annotations

import itertools
import time
from concurrent.futures import Future
from typing import Callable, TypeVar

import typer

from pg_porter.domain.models import ExportResult

T = TypeVar("T")

SPINNER_GLYPHS = ("|", "/", "-", "\\")
POLL_INTERVAL_SECONDS = 0.1

Echo = Callable[..., None]


def wait_for(
    future: "Future[T]",
    interval: float = POLL_INTERVAL_SECONDS,
    echo: Echo = typer.echo,
) -> T:
    """
    Render a spinner until `future` completes, then return its result.

    The future's exception, if any, is re-raised unchanged.
    """
    glyphs = itertools.cycle(SPINNER_GLYPHS)
    line = ""
    while not future.done():
        line = f"Processing... {next(glyphs)} "
        echo(f"\r{line}", nl=False)
        time.sleep(interval)

    if line:
        echo("\r" + " " * len(line) + "\r", nl=False)
    return future.result()


def print_summary(result: ExportResult, echo: Echo = typer.echo) -> None:
    echo(f"sql\t: {result.sql}")
    echo(f"output\t: {result.out}")
    echo(f"rows\t: {result.rows}")
    echo(f"elapsed\t: {result.elapsed_seconds:.2f} seconds")


__all__ = ["SPINNER_GLYPHS", "POLL_INTERVAL_SECONDS", "print_summary", "wait_for"]
