from __future__ import annotations

from typing import TYPE_CHECKING

from covsubmit import logger
from covsubmit.config import Options
from covsubmit.coverage.database import CoverageDatabase
from covsubmit.engine.files import file_coverage
from covsubmit.errors import SourceNotFoundError
from covsubmit.model import FileCoverage, Report

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from covsubmit.coverage.database import Module


def coverage_report(
    db: CoverageDatabase,
    modules: Iterable[Module],
    *,
    root: Path | None = None,
) -> list[FileCoverage]:
    """Assemble file coverage for *modules*, omitting those without a source.

    The order of the result is unspecified.
    """
    out: list[FileCoverage] = []
    for module in modules:
        try:
            out.append(file_coverage(db, module, root=root))
        except SourceNotFoundError as exc:
            logger.debug("skipping %s: %s", module, exc)
    return out


def build_report(db: CoverageDatabase, options: Options, *, root: Path | None = None) -> Report:
    files = coverage_report(db, db.modules(), root=root)
    logger.info("assembled coverage for %d of %d modules", len(files), len(db.modules()))
    return Report(
        service_job_id=options.service_job_id,
        service_name=options.service_name,
        source_files=tuple(files),
    )


def analyse(coverage_path: Path, options: Options | None = None, *, root: Path | None = None) -> Report:
    """Import *coverage_path* into a fresh database and build the report."""
    db = CoverageDatabase.from_file(coverage_path)
    return build_report(db, options or Options(), root=root)


__all__ = ["analyse", "build_report", "coverage_report"]
