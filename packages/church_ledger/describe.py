"""Description synthesis for rows whose description cell is unusable."""

from __future__ import annotations

import re
from collections.abc import Sequence

from .cells import RawRow, cell_at, cell_text, fold_text
from .parsers import looks_like_date, parse_amount

NO_DESCRIPTION = "Sem descrição"

_JOINER = " - "
_MIN_DESCRIPTION_LEN = 3
_LETTER_RE = re.compile(r"[^\W\d_]")
_NON_WORD_RE = re.compile(r"^[\d\W_]+$")


def _usable_description(text: str) -> bool:
    return len(text) >= _MIN_DESCRIPTION_LEN and not _NON_WORD_RE.match(text)


def synthesize_description(
    row: RawRow, headers: Sequence[str], description_index: int
) -> str:
    """Return a non-empty description for ``row``.

    The resolved description cell wins when it holds at least three
    characters and is not purely digits/punctuation. Otherwise every other
    cell that reads as prose (not a date, not an amount, more than three
    characters, at least one letter, not a repeat of its own header) is
    joined with ``" - "``. When nothing qualifies the ``NO_DESCRIPTION``
    sentinel is returned; the row stays importable.
    """

    own = cell_text(cell_at(row, description_index))
    if _usable_description(own):
        return own

    parts: list[str] = []
    for idx, value in enumerate(row):
        if idx == description_index:
            continue
        text = cell_text(value)
        if len(text) <= _MIN_DESCRIPTION_LEN or not _LETTER_RE.search(text):
            continue
        if looks_like_date(value) or parse_amount(value) is not None:
            continue
        if idx < len(headers) and fold_text(headers[idx]) == fold_text(text):
            continue
        parts.append(text)

    return _JOINER.join(parts) if parts else NO_DESCRIPTION


__all__ = ["NO_DESCRIPTION", "synthesize_description"]
