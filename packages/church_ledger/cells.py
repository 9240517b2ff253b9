"""Raw cell model shared by every parser in the importer.

Table decoders hand over loosely typed scalars. They are treated as a closed
variant with four kinds:

- ``TEXT``: a ``str`` that is non-blank after stripping
- ``NUMBER``: ``int``, ``float`` or ``Decimal`` (``bool`` is *not* a number)
- ``DATE``: ``datetime.date`` or ``datetime.datetime``
- ``EMPTY``: ``None`` or a blank string

Anything else a decoder might emit (booleans, times, formula objects) is
folded into ``TEXT`` through ``str()``. Parsers branch on :func:`cell_kind`
rather than probing values ad hoc.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

type Cell = str | int | float | Decimal | date | datetime | None
"""A single raw value as produced by a table decoder."""

type RawRow = Sequence[Cell]
type RawTable = Sequence[RawRow]
"""Rows of raw cells. Rows may be ragged; a missing cell reads as empty."""


class CellKind(Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    EMPTY = "empty"


_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def cell_kind(value: object) -> CellKind:
    """Classify ``value`` into exactly one :class:`CellKind`."""

    if value is None:
        return CellKind.EMPTY
    # bool is a subclass of int; keep it out of the numeric branch.
    if isinstance(value, bool):
        return CellKind.TEXT
    if isinstance(value, (date, datetime)):
        return CellKind.DATE
    if isinstance(value, (int, float, Decimal)):
        return CellKind.NUMBER
    if isinstance(value, str):
        return CellKind.TEXT if value.strip() else CellKind.EMPTY
    return CellKind.TEXT if str(value).strip() else CellKind.EMPTY


def is_empty(value: object) -> bool:
    return cell_kind(value) is CellKind.EMPTY


def cell_text(value: object) -> str:
    """Return a trimmed textual rendering of a cell (``""`` when empty).

    Numbers render without scientific notation and integral floats drop the
    trailing ``.0`` (spreadsheets store ``123`` as ``123.0``). Dates render in
    ISO form.
    """

    kind = cell_kind(value)
    if kind is CellKind.EMPTY:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if kind is CellKind.NUMBER:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, Decimal):
            return format(value, "f")
        return str(value)
    return " ".join(str(value).split())


def cell_at(row: RawRow, idx: int) -> Cell:
    """Return ``row[idx]`` or ``None`` for unresolved (-1) or out-of-range indices."""

    if idx < 0 or idx >= len(row):
        return None
    return row[idx]


def row_is_empty(row: RawRow | None) -> bool:
    return not row or all(is_empty(c) for c in row)


def fold_text(value: object) -> str:
    """Lowercase ``value`` and strip diacritics (``"Dízimo"`` -> ``"dizimo"``)."""

    s = unicodedata.normalize("NFKD", cell_text(value))
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    return " ".join(s.casefold().split())


def normalize_header(value: object) -> str:
    """Fold ``value`` and remove every non-alphanumeric character.

    ``"Descrição do Lançamento"`` -> ``"descricaodolancamento"``.
    """

    return _NON_ALNUM_RE.sub("", fold_text(value))


__all__ = [
    "Cell",
    "CellKind",
    "RawRow",
    "RawTable",
    "cell_at",
    "cell_kind",
    "cell_text",
    "fold_text",
    "is_empty",
    "normalize_header",
    "row_is_empty",
]
