"""Centralised exception hierarchy for covsubmit."""

from __future__ import annotations


class CovsubmitError(Exception):
    """Base class for all custom covsubmit exceptions."""


class CoverageDataError(CovsubmitError):
    """Base class for errors related to coverage data handling."""


class CoverageDataNotFoundError(CoverageDataError):
    """Coverage data file could not be located on disk."""


class InvalidCoverageDataError(CoverageDataError):
    """Coverage data file was found but does not contain a valid report."""


class UnknownModuleError(CoverageDataError):
    """A module was requested that the coverage database does not know."""


class SourceNotFoundError(CovsubmitError):
    """The source file backing a module cannot be located."""


class InvalidPayloadError(CovsubmitError):
    """The assembled job does not match the Coveralls payload schema."""


class UploadError(CovsubmitError):
    """The upload request could not be completed."""


__all__ = [
    "CoverageDataError",
    "CoverageDataNotFoundError",
    "CovsubmitError",
    "InvalidCoverageDataError",
    "InvalidPayloadError",
    "SourceNotFoundError",
    "UnknownModuleError",
    "UploadError",
]
