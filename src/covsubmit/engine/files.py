from __future__ import annotations

from typing import TYPE_CHECKING

from covsubmit.engine.lines import align
from covsubmit.engine.sources import find_source_file, project_filename
from covsubmit.errors import SourceNotFoundError
from covsubmit.model import FileCoverage

if TYPE_CHECKING:
    from pathlib import Path

    from covsubmit.coverage.database import CoverageDatabase, Module


def file_coverage(db: CoverageDatabase, module: Module, *, root: Path | None = None) -> FileCoverage:
    """Assemble the coverage record for *module*.

    Raises :class:`~covsubmit.errors.SourceNotFoundError` when the source
    cannot be located; callers treat that as "skip this file".
    """
    source_file = find_source_file(db, module)
    try:
        raw = source_file.read_bytes()
    except OSError as exc:
        msg = f"source for {module!r} cannot be read: {exc}"
        raise SourceNotFoundError(msg) from exc
    source = raw.decode("utf-8", errors="replace")
    source_lines = source.split("\n")
    coverage = align(len(source_lines), db.analyse(module))
    return FileCoverage(
        name=project_filename(source_file, root),
        source=source,
        coverage=tuple(coverage),
    )


__all__ = ["file_coverage"]
