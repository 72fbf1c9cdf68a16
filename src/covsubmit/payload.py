"""JSON encoding of the Coveralls job payload."""

from __future__ import annotations

import json
from functools import cache
from importlib import resources
from typing import TYPE_CHECKING

from jsonschema import ValidationError, validate

from covsubmit.errors import InvalidPayloadError

if TYPE_CHECKING:
    from covsubmit.model import Report


@cache
def get_schema() -> dict[str, object]:
    """Load and cache the JSON schema of the job payload."""
    text = resources.files("covsubmit.data").joinpath("schema.json").read_text(encoding="utf-8")
    return json.loads(text)


def encode_report(report: Report, *, indent: int | None = None) -> str:
    """Render *report* as validated Coveralls job JSON."""
    payload = report.to_dict()
    try:
        validate(payload, get_schema())
    except ValidationError as exc:
        msg = f"invalid job payload: {exc.message}"
        raise InvalidPayloadError(msg) from exc
    return json.dumps(payload, indent=indent, ensure_ascii=False)


__all__ = ["encode_report", "get_schema"]
