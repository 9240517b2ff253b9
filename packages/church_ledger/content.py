"""Content-based column profiling.

Guesses whether a column holds dates, amounts or free text from the shape of
its sampled values, independent of its header. Used by the column resolver
when header names did not resolve a role.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from .cells import RawRow, cell_at, cell_text, is_empty
from .parsers import looks_like_date, parse_amount

# Rows sampled per column for the ratios, and rows used for text length.
_SAMPLE_ROWS = 20
_TEXT_LENGTH_ROWS = 10
_LIKE_THRESHOLD = 0.5

_LETTER_RUN_RE = re.compile(r"[^\W\d_]{3,}")


@dataclass(frozen=True, slots=True)
class ColumnProfile:
    """Statistical shape of one column over the sampled rows.

    Ratios are fractions of the sampled *non-empty* cells.
    """

    index: int
    non_empty: int
    date_ratio: float
    numeric_ratio: float
    text_ratio: float
    avg_text_length: float

    @property
    def is_date_like(self) -> bool:
        return self.date_ratio > _LIKE_THRESHOLD

    @property
    def is_numeric_like(self) -> bool:
        return self.numeric_ratio > _LIKE_THRESHOLD

    @property
    def is_text_like(self) -> bool:
        return self.text_ratio > _LIKE_THRESHOLD


def is_text_bearing(value: object) -> bool:
    """A run of more than two letters, in a cell that is not an amount."""

    text = cell_text(value)
    return bool(_LETTER_RUN_RE.search(text)) and parse_amount(value) is None


def profile_column(
    data_rows: Sequence[RawRow],
    index: int,
    *,
    sample_size: int = _SAMPLE_ROWS,
    text_sample: int = _TEXT_LENGTH_ROWS,
) -> ColumnProfile:
    sample = [cell_at(row, index) for row in data_rows[:sample_size]]
    values = [v for v in sample if not is_empty(v)]
    n = len(values)

    if n == 0:
        dates = numbers = texts = 0
    else:
        dates = sum(1 for v in values if looks_like_date(v))
        numbers = sum(1 for v in values if parse_amount(v) is not None)
        texts = sum(1 for v in values if is_text_bearing(v))

    # Average length over the first rows, empty cells counting as zero.
    head = [cell_text(cell_at(row, index)) for row in data_rows[:text_sample]]
    avg_len = sum(len(t) for t in head) / len(head) if head else 0.0

    return ColumnProfile(
        index=index,
        non_empty=n,
        date_ratio=dates / n if n else 0.0,
        numeric_ratio=numbers / n if n else 0.0,
        text_ratio=texts / n if n else 0.0,
        avg_text_length=avg_len,
    )


def profile_columns(
    data_rows: Sequence[RawRow],
    width: int,
    *,
    sample_size: int = _SAMPLE_ROWS,
    text_sample: int = _TEXT_LENGTH_ROWS,
) -> list[ColumnProfile]:
    """Profile columns ``0..width-1`` over the leading data rows."""

    return [
        profile_column(data_rows, i, sample_size=sample_size, text_sample=text_sample)
        for i in range(width)
    ]


__all__ = ["ColumnProfile", "is_text_bearing", "profile_column", "profile_columns"]
