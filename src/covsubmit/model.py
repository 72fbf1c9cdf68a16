"""Coveralls job payload model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# A call count, or ``None`` for a line that is not executable.
LineCoverageEntry = int | None


@dataclass(frozen=True, slots=True)
class FileCoverage:
    """Coverage for one source file.

    ``coverage`` holds exactly one entry per ``"\\n"``-separated segment of
    ``source``.
    """

    name: str
    source: str
    coverage: tuple[LineCoverageEntry, ...]

    @property
    def relevant_lines(self) -> int:
        return sum(1 for c in self.coverage if c is not None)

    @property
    def covered_lines(self) -> int:
        return sum(1 for c in self.coverage if c)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "source": self.source, "coverage": list(self.coverage)}


@dataclass(frozen=True, slots=True)
class Report:
    service_job_id: str | None = None
    service_name: str | None = None
    source_files: tuple[FileCoverage, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "service_job_id": self.service_job_id,
            "service_name": self.service_name,
            "source_files": [f.to_dict() for f in self.source_files],
        }


__all__ = ["FileCoverage", "LineCoverageEntry", "Report"]
