from covsubmit.coverage.database import CompileInfo, CoverageDatabase
from covsubmit.coverage.discover import resolve_coverage_path

__all__ = ["CompileInfo", "CoverageDatabase", "resolve_coverage_path"]
