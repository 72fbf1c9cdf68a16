"""In-memory coverage database built from Cobertura-style coverage XML.

A :class:`CoverageDatabase` is an explicit handle on imported coverage data:
callers create one per run and pass it to the resolver and assembler, so
independent runs never share state.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from defusedxml import ElementTree

from covsubmit import logger
from covsubmit.errors import (
    CoverageDataNotFoundError,
    InvalidCoverageDataError,
    UnknownModuleError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from covsubmit.coverage.types import ElementLike

Module = str
RawHit = tuple[int, int]


@dataclass(frozen=True, slots=True)
class CompileInfo:
    """Build metadata recorded for a module: where its source came from."""

    module: Module
    source: Path


def read_root(path: Path) -> ElementLike:
    """Parse coverage XML and return the root element.

    Accepts Cobertura-style reports, which use `<coverage>` as root.
    """
    try:
        root = ElementTree.parse(path).getroot()
    except ElementTree.ParseError as exc:
        msg = f"failed to parse coverage XML {path}: {exc}"
        raise InvalidCoverageDataError(msg) from exc
    tag = (root.tag or "").split("}")[-1]  # tolerate namespaces
    if tag.lower() != "coverage":
        msg = f"unexpected root tag {root.tag!r} in {path}"
        raise InvalidCoverageDataError(msg)
    return root


def _iter_sources(root: ElementLike, base: Path) -> Iterator[Path]:
    for elem in root.findall("./sources/source"):
        text = (elem.text or "").strip()
        if text:
            yield base / text


def _iter_hits(cls: ElementLike) -> Iterator[RawHit]:
    for line_elem in cls.findall("./lines/line"):
        n_raw = line_elem.get("number")
        hits_raw = line_elem.get("hits")
        if not n_raw or hits_raw is None:
            continue
        try:
            yield int(n_raw), max(0, int(hits_raw))
        except ValueError:
            continue


def _is_file(path: Path) -> bool:
    # names the filesystem rejects (too long, no permission) count as absent
    try:
        return path.is_file()
    except OSError:
        return False


class CoverageDatabase:
    """Per-line call counts for every module found in the imported reports."""

    def __init__(self) -> None:
        self._hits: dict[Module, defaultdict[int, int]] = {}
        self._roots: dict[Module, tuple[Path, ...]] = {}

    @classmethod
    def from_file(cls, path: Path) -> CoverageDatabase:
        db = cls()
        db.import_file(path)
        return db

    def import_file(self, path: Path) -> None:
        """Import a coverage XML report, merging it into the database.

        Hits recorded for the same module line in several reports are summed.
        """
        path = Path(path)
        if not path.is_file():
            msg = f"coverage data not found: {path}"
            raise CoverageDataNotFoundError(msg)

        root = read_root(path)
        roots = tuple(_iter_sources(root, path.parent.resolve())) or (path.parent.resolve(),)
        count = 0
        for cls in root.findall(".//class"):
            filename = cls.get("filename")
            if not filename:
                continue
            lines = self._hits.setdefault(filename, defaultdict(int))
            self._roots.setdefault(filename, roots)
            for number, hits in _iter_hits(cls):
                lines[number] += hits
            count += 1
        logger.debug("imported %d class entries from %s", count, path)

    def modules(self) -> list[Module]:
        """Return the covered modules in import order."""
        return list(self._hits)

    def analyse(self, module: Module) -> list[RawHit]:
        """Return ``(line, calls)`` pairs for *module*, ascending by line."""
        try:
            lines = self._hits[module]
        except KeyError as exc:
            msg = f"module not in coverage data: {module!r}"
            raise UnknownModuleError(msg) from exc
        return sorted(lines.items())

    def compile_info(self, module: Module) -> CompileInfo | None:
        """Return where *module* was built from, or ``None`` if it is unknown.

        The first source root that actually holds the file wins; otherwise the
        first root is assumed so callers can still report a path.
        """
        roots = self._roots.get(module)
        if roots is None:
            return None
        candidate = Path(module)
        if candidate.is_absolute():
            return CompileInfo(module, candidate)
        for root in roots:
            if _is_file(root / candidate):
                return CompileInfo(module, root / candidate)
        return CompileInfo(module, roots[0] / candidate)


__all__ = ["CompileInfo", "CoverageDatabase", "Module", "RawHit", "read_root"]
