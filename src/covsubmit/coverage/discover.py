from __future__ import annotations

import tomllib
from pathlib import Path

from covsubmit import logger
from covsubmit.errors import CoverageDataNotFoundError


def _get_xml_from_pyproject(pyproject: Path) -> str | None:
    """Extract the XML coverage file path from pyproject.toml."""
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to parse %s: %s", pyproject, e)
        return None

    coverage_cfg = data.get("tool", {}).get("coverage", {})
    xml = coverage_cfg.get("xml", {}).get("output")
    return xml if isinstance(xml, str) and xml.strip() else None


def resolve_coverage_path(cov_path: Path | None, *, cwd: Path | None = None) -> Path:
    """Resolve the coverage XML input.

    Rules
    -----
    - If `cov_path` is provided: it must exist.
    - Else: `[tool.coverage.xml] output` from `pyproject.toml`.
    - Else: `coverage.xml` in the working directory.
    """
    base = cwd or Path.cwd()
    if cov_path is not None:
        path = cov_path if cov_path.is_absolute() else base / cov_path
        if not path.is_file():
            msg = f"coverage XML not found: {cov_path}"
            raise CoverageDataNotFoundError(msg)
        return path.resolve()

    pyproject = base / "pyproject.toml"
    if pyproject.is_file():
        configured = _get_xml_from_pyproject(pyproject)
        if configured:
            path = base / configured
            if not path.is_file():
                msg = f"coverage XML from pyproject.toml not found: {path}"
                raise CoverageDataNotFoundError(msg)
            logger.info("Using coverage XML file from config: %s", configured)
            return path.resolve()

    default = base / "coverage.xml"
    if default.is_file():
        return default.resolve()

    msg = "no coverage XML provided and coverage.xml not found"
    raise CoverageDataNotFoundError(msg)


__all__ = ["resolve_coverage_path"]
