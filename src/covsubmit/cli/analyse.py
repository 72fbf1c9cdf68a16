from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Annotated

import typer

from covsubmit.cli._shared import build_options, coverage_input, exit_on_error
from covsubmit.cli.exit_codes import EXIT_OK
from covsubmit.engine.report import analyse
from covsubmit.io import write_output
from covsubmit.payload import encode_report


def register(app: typer.Typer) -> None:
    @app.command("analyse")
    def analyse_cmd(
        coverage: Annotated[
            Path | None,
            typer.Argument(help="Coverage XML file. If omitted, discovery is used."),
        ] = None,
        service_name: Annotated[
            str | None,
            typer.Option("--service-name", help="CI service name to record in the job."),
        ] = None,
        service_job_id: Annotated[
            str | None,
            typer.Option("--service-job-id", help="CI job identifier to record in the job."),
        ] = None,
        output: Annotated[
            Path | None,
            typer.Option("--output", help="Write the payload to PATH (use '-' for stdout)."),
        ] = None,
    ) -> None:
        """Print the Coveralls job JSON without uploading it."""
        path = coverage_input(coverage)
        options = build_options(service_name=service_name, service_job_id=service_job_id)
        with exit_on_error():
            text = encode_report(analyse(path, options), indent=2)
        write_output(text, output)
        raise typer.Exit(code=EXIT_OK)


__all__ = ["register"]
