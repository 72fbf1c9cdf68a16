"""Public entry points: analyse a coverage file, upload it, or do both for Travis CI."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from covsubmit.config import TRAVIS_JOB_ID_ENV, TRAVIS_SERVICE_NAME, Options, merge_options
from covsubmit.engine.report import analyse
from covsubmit.transport import CoverallsTransport, UploadResult

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


def _as_options(options: Options | Mapping[str, Any] | None) -> Options:
    if options is None:
        return Options()
    if isinstance(options, Options):
        return options
    return Options.from_mapping(options)


def report(
    coverage_path: Path,
    options: Options | Mapping[str, Any] | None = None,
    *,
    transport: CoverallsTransport | None = None,
    root: Path | None = None,
) -> UploadResult:
    """Analyse *coverage_path* and upload the resulting job.

    A non-200 answer is returned, not raised; inspect ``UploadResult.body``.
    A *transport* passed in must already be open; it stays open afterwards
    and keeps its own timeout.
    """
    opts = _as_options(options)
    job = analyse(coverage_path, opts, root=root)
    if transport is not None:
        return transport.upload(job, opts.upload_url)
    with CoverallsTransport(timeout=opts.timeout) as conn:
        return conn.upload(job, opts.upload_url)


def travis_ci(
    coverage_path: Path,
    options: Options | Mapping[str, Any] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    transport: CoverallsTransport | None = None,
) -> UploadResult:
    env = os.environ if environ is None else environ
    defaults = {"service_name": TRAVIS_SERVICE_NAME, "service_job_id": env.get(TRAVIS_JOB_ID_ENV)}
    merged = merge_options(defaults, _as_options(options).to_mapping())
    return report(coverage_path, Options.from_mapping(merged), transport=transport)


__all__ = ["analyse", "report", "travis_ci"]
