"""Header-row location.

Exports often carry a title line, a bank preamble or a blank row above the
real column header. The locator scans a few leading rows and picks the first
one that reads like labels rather than data.
"""

from __future__ import annotations

from .cells import RawRow, RawTable, is_empty
from .logging_setup import get_logger
from .parsers import looks_like_date, parse_amount

_logger = get_logger("church_ledger.header")

_MAX_SCAN_ROWS = 5
_MIN_LABEL_CELLS = 2


def is_header_like(row: RawRow) -> bool:
    """At least two non-empty cells, at least half of them neither a date nor an amount."""

    values = [c for c in row if not is_empty(c)]
    if len(values) < _MIN_LABEL_CELLS:
        return False
    labels = sum(1 for v in values if not looks_like_date(v) and parse_amount(v) is None)
    return labels * 2 >= len(values)


def locate_header_row(table: RawTable, *, max_scan: int = _MAX_SCAN_ROWS) -> int:
    """Return the index of the row most likely holding the column headers.

    Scans ``min(max_scan, len(table))`` rows in order and returns the first
    header-like one; defaults to ``0`` when none qualifies.
    """

    for idx, row in enumerate(table[:max_scan]):
        if is_header_like(row):
            if idx:
                _logger.debug("header row located at index %d (skipped %d preamble rows)", idx, idx)
            return idx
    return 0


__all__ = ["is_header_like", "locate_header_row"]
