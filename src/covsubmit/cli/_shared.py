from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import click.utils as click_utils
import typer

from covsubmit import logger
from covsubmit.cli.exit_codes import EXIT_DATAERR, EXIT_GENERIC, EXIT_NOINPUT, EXIT_UNAVAILABLE
from covsubmit.config import LOG_FORMAT, Options
from covsubmit.coverage.discover import resolve_coverage_path
from covsubmit.errors import (
    CoverageDataNotFoundError,
    CovsubmitError,
    InvalidCoverageDataError,
    InvalidPayloadError,
    UploadError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


def resolve_use_color(*, color: bool, no_color: bool, color_allowed: bool) -> bool:
    # CLI flags take precedence over what the terminal allows.
    if no_color:
        return False
    if color:
        return True
    return color_allowed


def stdout_allows_color() -> bool:
    """Return whether stdout is a terminal that keeps ANSI codes."""
    try:
        is_tty = bool(getattr(sys.stdout, "isatty", lambda: False)())
    except OSError:
        return False
    return is_tty and not click_utils.should_strip_ansi(sys.stdout)


def configure_logging(*, quiet: bool, verbose: bool) -> None:
    """Configure logging based on *quiet*/*verbose*."""
    level = logging.ERROR if quiet else (logging.DEBUG if verbose else logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)


def build_options(
    *,
    service_name: str | None = None,
    service_job_id: str | None = None,
    url: str | None = None,
    timeout: float | None = None,
) -> Options:
    extra = {"timeout": timeout} if timeout is not None else {}
    return Options(service_job_id=service_job_id, service_name=service_name, url=url, extra=extra)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Translate covsubmit failures into an error line plus a sysexits code."""
    try:
        yield
    except CoverageDataNotFoundError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT) from exc
    except (InvalidCoverageDataError, InvalidPayloadError) as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_DATAERR) from exc
    except UploadError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_UNAVAILABLE) from exc
    except OSError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT) from exc
    except CovsubmitError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_GENERIC) from exc


def coverage_input(coverage: Path | None) -> Path:
    with exit_on_error():
        return resolve_coverage_path(coverage, cwd=Path.cwd())
