from covsubmit.engine.files import file_coverage
from covsubmit.engine.lines import align
from covsubmit.engine.report import analyse, build_report, coverage_report
from covsubmit.engine.sources import find_source_file, project_filename, project_root

__all__ = [
    "align",
    "analyse",
    "build_report",
    "coverage_report",
    "file_coverage",
    "find_source_file",
    "project_filename",
    "project_root",
]
