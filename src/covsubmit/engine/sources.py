"""Locate the source file behind a module and name it relative to the project."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from covsubmit.errors import SourceNotFoundError

if TYPE_CHECKING:
    from covsubmit.coverage.database import CoverageDatabase, Module

# Test runners and log collectors that run from inside the project tree.
_RUNNER_DIR_RE = re.compile(r"/(logs|\.eunit|\.tox|\.nox|\.pytest_cache)/.+$")


def find_source_file(db: CoverageDatabase, module: Module) -> Path:
    info = db.compile_info(module)
    if info is None:
        msg = f"no build metadata for {module!r}"
        raise SourceNotFoundError(msg)
    try:
        exists = info.source.is_file()
    except OSError as exc:
        msg = f"source for {module!r} cannot be checked at {info.source}: {exc}"
        raise SourceNotFoundError(msg) from exc
    if not exists:
        msg = f"source for {module!r} not found at {info.source}"
        raise SourceNotFoundError(msg)
    return info.source


def project_root(cwd: Path | None = None) -> Path:
    """Return the project root: *cwd* minus any test-runner working directory."""
    text = (cwd or Path.cwd()).as_posix()
    return Path(_RUNNER_DIR_RE.sub("", text))


def project_filename(path: Path, root: Path | None = None) -> str:
    """Return *path* relative to the project root in POSIX form.

    Paths outside the root are returned unchanged.
    """
    base = root if root is not None else project_root()
    for candidate, anchor in ((path, base), (path.resolve(), base.resolve())):
        try:
            return candidate.relative_to(anchor).as_posix()
        except ValueError:
            continue
    return path.as_posix()


__all__ = ["find_source_file", "project_filename", "project_root"]
