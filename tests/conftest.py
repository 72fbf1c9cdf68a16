from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

import pytest
from click.testing import CliRunner

HitsSpec = Mapping[int, int] | Iterable[int]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def coverage_xml_content() -> Callable[..., str]:
    def build(mapping: Mapping[Path | str, HitsSpec], *, sources: Iterable[Path | str] = ()) -> str:
        classes: list[str] = []
        for file, lines in mapping.items():
            items = lines.items() if isinstance(lines, Mapping) else ((ln, 0) for ln in lines)
            lines_xml = "".join(f'<line number="{ln}" hits="{hits}"/>' for ln, hits in items)
            classes.append(f'<class filename="{file}"><lines>{lines_xml}</lines></class>')
        classes_xml = "".join(classes)
        sources_xml = "".join(f"<source>{s}</source>" for s in sources)
        return (
            "<coverage>"
            f"<sources>{sources_xml}</sources>"
            f"<packages><package><classes>{classes_xml}</classes></package></packages>"
            "</coverage>"
        )

    return build


@pytest.fixture
def coverage_xml_file(
    tmp_path: Path,
    coverage_xml_content: Callable[..., str],
) -> Callable[..., Path]:
    def write(
        mapping: Mapping[Path | str, HitsSpec],
        *,
        sources: Iterable[Path | str] = (),
        filename: str = "coverage.xml",
    ) -> Path:
        xml_file = tmp_path / filename
        xml_file.write_text(coverage_xml_content(mapping, sources=sources), encoding="utf-8")
        return xml_file

    return write


@pytest.fixture
def project(tmp_path: Path) -> dict[str, Path]:
    """A tiny project with one module under ``pkg/``."""
    pkg = tmp_path / "pkg"
    pkg.mkdir()
    mod = pkg / "mod.py"
    mod.write_text("import os\n\n\ndef f():\n    return os.sep\n", encoding="utf-8")
    return {"root": tmp_path, "pkg": pkg, "mod": mod}
