from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from covsubmit.model import LineCoverageEntry


def align(total_lines: int, raw_hits: Iterable[tuple[int, int]]) -> list[LineCoverageEntry]:
    """Spread ascending ``(line, calls)`` pairs over ``total_lines`` slots.

    Lines without a record come out as ``None``. Line 0 is a module summary,
    not a source line, and is always dropped.
    """
    out: list[LineCoverageEntry] = []
    hits = iter((n, c) for n, c in raw_hits if n != 0)
    pending = next(hits, None)
    for line in range(1, total_lines + 1):
        # skip anything the source walk has already passed
        while pending is not None and pending[0] < line:
            pending = next(hits, None)
        if pending is not None and pending[0] == line:
            out.append(pending[1])
            pending = next(hits, None)
        else:
            out.append(None)
    return out


__all__ = ["align"]
