from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from covsubmit.config import Options
from covsubmit.coverage.database import CoverageDatabase
from covsubmit.engine.files import file_coverage
from covsubmit.engine.report import analyse, build_report, coverage_report
from covsubmit.errors import InvalidPayloadError, SourceNotFoundError
from covsubmit.model import Report
from covsubmit.payload import encode_report


def test_file_coverage(project: dict[str, Path], coverage_xml_file: Callable[..., Path]) -> None:
    xml = coverage_xml_file({"pkg/mod.py": {0: 3, 1: 1, 4: 1, 5: 0}}, sources=[project["root"]])
    db = CoverageDatabase.from_file(xml)
    fc = file_coverage(db, "pkg/mod.py", root=project["root"])
    assert fc.name == "pkg/mod.py"
    assert fc.source == project["mod"].read_text()
    # trailing newline gives a sixth, empty segment
    assert fc.coverage == (1, None, None, 1, 0, None)
    assert fc.relevant_lines == 3
    assert fc.covered_lines == 2


def test_file_coverage_without_trailing_newline(
    tmp_path: Path, coverage_xml_file: Callable[..., Path]
) -> None:
    (tmp_path / "a.py").write_text("x = 1\ny = 2", encoding="utf-8")
    db = CoverageDatabase.from_file(coverage_xml_file({"a.py": {1: 1, 2: 1}}, sources=[tmp_path]))
    assert file_coverage(db, "a.py", root=tmp_path).coverage == (1, 1)


def test_file_coverage_keeps_crlf_in_source(tmp_path: Path, coverage_xml_file: Callable[..., Path]) -> None:
    (tmp_path / "a.py").write_bytes(b"x = 1\r\ny = 2\r\n")
    db = CoverageDatabase.from_file(coverage_xml_file({"a.py": {1: 1}}, sources=[tmp_path]))
    fc = file_coverage(db, "a.py", root=tmp_path)
    assert fc.source == "x = 1\r\ny = 2\r\n"
    assert fc.coverage == (1, None, None)


def test_file_coverage_unresolvable() -> None:
    with pytest.raises(SourceNotFoundError):
        file_coverage(CoverageDatabase(), "nothing")


def test_coverage_report_skips_unresolvable() -> None:
    assert coverage_report(CoverageDatabase(), ["nothing"]) == []


def test_build_report_partial(
    project: dict[str, Path], coverage_xml_file: Callable[..., Path]
) -> None:
    (project["pkg"] / "util.py").write_text("a = 1\n")
    xml = coverage_xml_file(
        {"pkg/mod.py": {1: 1}, "pkg/gone.py": {1: 1}, "pkg/util.py": {1: 2}},
        sources=[project["root"]],
    )
    db = CoverageDatabase.from_file(xml)
    report = build_report(db, Options(service_job_id="42", service_name="ci"), root=project["root"])
    assert report.service_job_id == "42"
    assert report.service_name == "ci"
    assert {f.name for f in report.source_files} == {"pkg/mod.py", "pkg/util.py"}


def test_build_report_defaults_metadata_to_none(coverage_xml_file: Callable[..., Path]) -> None:
    report = build_report(CoverageDatabase.from_file(coverage_xml_file({})), Options())
    assert report.to_dict() == {"service_job_id": None, "service_name": None, "source_files": []}


def test_every_file_coverage_matches_its_source(
    project: dict[str, Path], coverage_xml_file: Callable[..., Path]
) -> None:
    (project["pkg"] / "empty.py").write_text("")
    (project["pkg"] / "blank.py").write_text("\n\n\n")
    xml = coverage_xml_file(
        {"pkg/mod.py": {1: 1, 5: 1, 40: 1}, "pkg/empty.py": {0: 1}, "pkg/blank.py": [2]},
        sources=[project["root"]],
    )
    report = analyse(xml, Options(), root=project["root"])
    assert len(report.source_files) == 3
    for f in report.source_files:
        assert len(f.coverage) == len(f.source.split("\n"))


def test_encode_report_shape(project: dict[str, Path], coverage_xml_file: Callable[..., Path]) -> None:
    xml = coverage_xml_file({"pkg/mod.py": {1: 1}}, sources=[project["root"]])
    report = analyse(xml, Options(service_name="travis-ci"), root=project["root"])
    data = json.loads(encode_report(report))
    assert data == {
        "service_job_id": None,
        "service_name": "travis-ci",
        "source_files": [
            {
                "name": "pkg/mod.py",
                "source": project["mod"].read_text(),
                "coverage": [1, None, None, None, None, None],
            }
        ],
    }


def test_overlong_name_is_skipped(tmp_path: Path, coverage_xml_file: Callable[..., Path]) -> None:
    (tmp_path / "ok.py").write_text("a = 1\n")
    xml = coverage_xml_file({"x" * 300 + ".py": {1: 1}, "ok.py": {1: 1}}, sources=[tmp_path])
    report = build_report(CoverageDatabase.from_file(xml), Options(), root=tmp_path)
    assert [f.name for f in report.source_files] == ["ok.py"]


def test_unreadable_source_is_skipped(
    tmp_path: Path, coverage_xml_file: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "ok.py").write_text("a = 1\n")
    (tmp_path / "locked.py").write_text("b = 2\n")
    xml = coverage_xml_file({"locked.py": {1: 1}, "ok.py": {1: 1}}, sources=[tmp_path])
    db = CoverageDatabase.from_file(xml)
    read_bytes = Path.read_bytes

    def guarded(self: Path) -> bytes:
        if self.name == "locked.py":
            raise PermissionError(13, "Permission denied", str(self))
        return read_bytes(self)

    monkeypatch.setattr(Path, "read_bytes", guarded)
    with pytest.raises(SourceNotFoundError, match="cannot be read"):
        file_coverage(db, "locked.py", root=tmp_path)
    report = build_report(db, Options(), root=tmp_path)
    assert [f.name for f in report.source_files] == ["ok.py"]


def test_non_string_job_id_is_a_payload_error() -> None:
    bad: Any = 12
    with pytest.raises(InvalidPayloadError, match="invalid job payload"):
        encode_report(Report(service_job_id=bad))
