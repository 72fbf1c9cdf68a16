"""Central configuration, constants and option handling for ``covsubmit``."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

# Default Coveralls job endpoint.
COVERALLS_URL = "https://coveralls.io/api/v1/jobs"

# Seconds to wait on the upload before giving up.
DEFAULT_TIMEOUT = 30.0

TRAVIS_JOB_ID_ENV = "TRAVIS_JOB_ID"
TRAVIS_SERVICE_NAME = "travis-ci"

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

_NAMED_KEYS = ("service_job_id", "service_name", "url")


def merge_options(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Merge two option mappings; *overrides* wins on key collision.

    The result is ordered by key so two merges of equal inputs compare and
    serialise identically.
    """
    merged = {**defaults, **overrides}
    return {key: merged[key] for key in sorted(merged)}


@dataclasses.dataclass(frozen=True, slots=True)
class Options:
    """Options for a single analyse/report run.

    Unknown keys are kept in ``extra`` so callers can pass settings that only
    a collaborator (such as the transport) understands.
    """

    service_job_id: str | None = None
    service_name: str | None = None
    url: str | None = None
    extra: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Options:
        # numeric job ids (Travis exports them as digits) are sent as strings
        named = {k: None if data[k] is None else str(data[k]) for k in _NAMED_KEYS if k in data}
        extra = {k: v for k, v in data.items() if k not in _NAMED_KEYS}
        return cls(**named, extra=extra)

    def to_mapping(self) -> dict[str, Any]:
        """Return the options as a key-sorted mapping without unset named fields."""
        out: dict[str, Any] = dict(self.extra)
        for key in _NAMED_KEYS:
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return {key: out[key] for key in sorted(out)}

    def merged(self, overrides: Options | Mapping[str, Any]) -> Options:
        other = overrides.to_mapping() if isinstance(overrides, Options) else overrides
        return Options.from_mapping(merge_options(self.to_mapping(), other))

    @property
    def upload_url(self) -> str:
        return self.url or COVERALLS_URL

    @property
    def timeout(self) -> float:
        return float(self.extra.get("timeout", DEFAULT_TIMEOUT))


__all__ = [
    "COVERALLS_URL",
    "DEFAULT_TIMEOUT",
    "LOG_FORMAT",
    "TRAVIS_JOB_ID_ENV",
    "TRAVIS_SERVICE_NAME",
    "Options",
    "merge_options",
]
