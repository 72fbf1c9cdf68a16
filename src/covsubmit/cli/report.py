from __future__ import annotations

import os
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Annotated

import typer

from covsubmit import api
from covsubmit.cli._shared import build_options, coverage_input, exit_on_error
from covsubmit.cli.exit_codes import EXIT_OK
from covsubmit.config import TRAVIS_JOB_ID_ENV

if TYPE_CHECKING:
    from covsubmit.transport import UploadResult

UrlOption = Annotated[
    str | None,
    typer.Option("--url", help="Upload endpoint (defaults to the Coveralls jobs API)."),
]
TimeoutOption = Annotated[
    float | None,
    typer.Option("--timeout", help="Seconds to wait for the upload.", min=0),
]
CoverageArgument = Annotated[
    Path | None,
    typer.Argument(help="Coverage XML file. If omitted, discovery is used."),
]


def _echo_result(result: UploadResult) -> None:
    if result.ok:
        typer.echo("Coverage uploaded.")
    else:
        # not a failure: the service answered, show what it said
        typer.echo(f"Coveralls answered HTTP {result.status_code}:", err=True)
        typer.echo(result.body, err=True)


def register(app: typer.Typer) -> None:
    @app.command("report")
    def report_cmd(
        coverage: CoverageArgument = None,
        service_name: Annotated[
            str | None,
            typer.Option("--service-name", help="CI service name to record in the job."),
        ] = None,
        service_job_id: Annotated[
            str | None,
            typer.Option("--service-job-id", help="CI job identifier to record in the job."),
        ] = None,
        url: UrlOption = None,
        timeout: TimeoutOption = None,
    ) -> None:
        """Build the Coveralls job and upload it."""
        path = coverage_input(coverage)
        options = build_options(
            service_name=service_name,
            service_job_id=service_job_id,
            url=url,
            timeout=timeout,
        )
        with exit_on_error():
            result = api.report(path, options)
        _echo_result(result)
        raise typer.Exit(code=EXIT_OK)

    @app.command("travis-ci")
    def travis_ci_cmd(
        coverage: CoverageArgument = None,
        url: UrlOption = None,
        timeout: TimeoutOption = None,
    ) -> None:
        """Upload using the job id Travis CI exports as TRAVIS_JOB_ID."""
        path = coverage_input(coverage)
        options = build_options(url=url, timeout=timeout)
        if os.environ.get(TRAVIS_JOB_ID_ENV) is None:
            typer.echo(f"WARNING: {TRAVIS_JOB_ID_ENV} is not set", err=True)
        with exit_on_error():
            result = api.travis_ci(path, options, environ=os.environ)
        _echo_result(result)
        raise typer.Exit(code=EXIT_OK)


__all__ = ["register"]
