"""Locale-aware scalar parsers for dates and amounts.

Both parsers are total: a cell that cannot be interpreted yields ``None``
("unparseable") instead of raising, because unparseable cells are routine in
dirty exports and callers branch on the result.

Date strategies, in order (first validated candidate wins):

1. native ``date``/``datetime`` pass-through
2. fixed formats: ``DD/MM/YYYY``, ``D/M/YYYY``, ``YYYY-MM-DD``,
   ``DD-MM-YYYY``, ``DD.MM.YYYY``, ``YYYYMMDD``, ``DDMMYYYY``
3. spreadsheet serial dates (numeric cells only, 1900 date system)
4. generic date-string parse via :mod:`dateutil` (day-first)

Every candidate must have a year in [1900, 2100], a month in [1, 12] and a
day in [1, 31]. Day/month-length cross-checks are intentionally not done.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import cast

from dateutil import parser as dateutil_parser

from .cells import CellKind, cell_kind, cell_text

_MIN_YEAR = 1900
_MAX_YEAR = 2100

# Windows/Lotus epoch: serial 1 is 1900-01-01 once the 1900 leap-year bug is
# folded into the epoch (serials >= 61 decode exactly).
_SERIAL_EPOCH = date(1899, 12, 30)

# Deterministic fill-in for components a generic date string leaves out.
_GENERIC_DEFAULT = datetime(_MIN_YEAR, 1, 1)

_DATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(?P<d>\d{2})/(?P<m>\d{2})/(?P<y>\d{4})$"),  # DD/MM/YYYY
    re.compile(r"^(?P<d>\d{1,2})/(?P<m>\d{1,2})/(?P<y>\d{4})$"),  # D/M/YYYY
    re.compile(r"^(?P<y>\d{4})-(?P<m>\d{1,2})-(?P<d>\d{1,2})$"),  # YYYY-MM-DD
    re.compile(r"^(?P<d>\d{1,2})-(?P<m>\d{1,2})-(?P<y>\d{4})$"),  # DD-MM-YYYY
    re.compile(r"^(?P<d>\d{1,2})\.(?P<m>\d{1,2})\.(?P<y>\d{4})$"),  # DD.MM.YYYY
    re.compile(r"^(?P<y>\d{4})(?P<m>\d{2})(?P<d>\d{2})$"),  # YYYYMMDD
    re.compile(r"^(?P<d>\d{2})(?P<m>\d{2})(?P<y>\d{4})$"),  # DDMMYYYY
)

_TIME_SUFFIX_RE = re.compile(r"[\sT]")
_DIGIT_RUN_RE = re.compile(r"\d+")
_YEAR_RUN_RE = re.compile(r"\d{4}")
_DATE_SEPARATOR_RE = re.compile(r"\d[/-]\d")

_CURRENCY_RE = re.compile(r"R\$|US\$|[$€£¥]|\b(?:BRL|USD|EUR)\b", re.IGNORECASE)
_LETTER_RE = re.compile(r"[^\W\d_]")
_NON_NUMERIC_RE = re.compile(r"[^\d,.]")

# Standalone tokens some bank exports append to amounts ("150,00 D").
_DEBIT_MARKERS = frozenset({"D", "DB", "DR", "DEB"})
_CREDIT_MARKERS = frozenset({"C", "CR", "CRED"})


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def _validated(year: int, month: int, day: int) -> str | None:
    if not (_MIN_YEAR <= year <= _MAX_YEAR and 1 <= month <= 12 and 1 <= day <= 31):
        return None
    return f"{year:04d}-{month:02d}-{day:02d}"


def _from_patterns(text: str) -> tuple[bool, str | None]:
    """Return ``(matched, iso)``.

    ``matched`` is true when the text has one of the fixed shapes, even if no
    reading of it passed validation; such text is rejected, not re-guessed.
    """

    # Drop a trailing time component ("01/03/2024 10:00", "2024-03-01T10:00").
    token = _TIME_SUFFIX_RE.split(text, maxsplit=1)[0]
    matched = False
    for pattern in _DATE_PATTERNS:
        m = pattern.match(token)
        if m is None:
            continue
        matched = True
        iso = _validated(int(m["y"]), int(m["m"]), int(m["d"]))
        if iso is not None:
            return True, iso
    return matched, None


def _from_serial(value: int | float | Decimal) -> str | None:
    try:
        serial = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if serial != serial or serial < 1:  # NaN or before the epoch
        return None
    try:
        d = _SERIAL_EPOCH + timedelta(days=int(serial))
    except OverflowError:
        return None
    return _validated(d.year, d.month, d.day)


def _from_generic(text: str) -> str | None:
    # Require something date-shaped: a 4-digit year or three numeric groups.
    if not (_YEAR_RUN_RE.search(text) or len(_DIGIT_RUN_RE.findall(text)) >= 3):
        return None
    # Amount-shaped text is never a date ("1.234,56", "2024", "150,00 D").
    if _parse_amount_text(text) is not None and not _DATE_SEPARATOR_RE.search(text):
        return None
    try:
        dt = dateutil_parser.parse(text, dayfirst=True, default=_GENERIC_DEFAULT)
    except (ValueError, OverflowError):
        return None
    return _validated(dt.year, dt.month, dt.day)


def parse_date(value: object) -> str | None:
    """Return ``value`` as an ISO ``YYYY-MM-DD`` string, or ``None``.

    >>> parse_date("01/03/2024")
    '2024-03-01'
    >>> parse_date("Dízimo") is None
    True
    """

    kind = cell_kind(value)
    if kind is CellKind.EMPTY:
        return None
    if kind is CellKind.DATE:
        d = cast(date, value)
        return _validated(d.year, d.month, d.day)
    if kind is CellKind.NUMBER:
        return _from_patterns(cell_text(value))[1] or _from_serial(cast(float, value))
    text = cell_text(value)
    matched, iso = _from_patterns(text)
    if matched:
        return iso
    return _from_generic(text)


def looks_like_date(value: object) -> bool:
    """Whether a cell *reads* as a date.

    Unlike :func:`parse_date`, bare numbers never look like dates: a
    spreadsheet serial is only a date once the column is known to hold dates.
    """

    kind = cell_kind(value)
    if kind is CellKind.DATE or kind is CellKind.TEXT:
        return parse_date(value) is not None
    return False


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------


def _normalize_separators(s: str) -> str:
    if "," in s and "." in s:
        # The separator that appears last is the decimal one.
        if s.rfind(",") > s.rfind("."):
            return s.replace(".", "").replace(",", ".")
        return s.replace(",", "")
    if "," in s:
        head, _, tail = s.rpartition(",")
        if s.count(",") == 1 and 1 <= len(tail) <= 2:
            return f"{head}.{tail}"
        return s.replace(",", "")
    if s.count(".") > 1:
        return s.replace(".", "")
    return s


def _parse_amount_text(raw: str) -> Decimal | None:
    s = _CURRENCY_RE.sub(" ", raw)
    negative = False

    kept: list[str] = []
    for token in s.split():
        marker = token.upper().rstrip(".")
        if marker in _DEBIT_MARKERS:
            negative = True
            continue
        if marker in _CREDIT_MARKERS:
            continue
        kept.append(token)
    s = "".join(kept)
    if not s or _LETTER_RE.search(s):
        return None

    # Strip sign markers and wrapping parentheses until stable so that any
    # ordering ("-(500)", "(-500)", "+500") is handled.
    while True:
        changed = False
        if s.startswith("+"):
            s = s[1:]
            changed = True
        elif s.startswith("-"):
            negative = True
            s = s[1:]
            changed = True
        if s.endswith("-"):
            # Trailing minus ("500-") as printed by some ledgers.
            negative = True
            s = s[:-1]
            changed = True
        if len(s) >= 2 and s.startswith("(") and s.endswith(")"):
            negative = True
            s = s[1:-1]
            changed = True
        if not changed:
            break
    # A sign left inside the number ("10-20") is a range or code, not an amount.
    if "-" in s or "+" in s:
        return None

    digits = _NON_NUMERIC_RE.sub("", s)
    if not any(ch.isdigit() for ch in digits):
        return None
    try:
        amount = Decimal(_normalize_separators(digits))
    except InvalidOperation:
        return None
    return -amount if negative else amount


def parse_amount(value: object) -> Decimal | None:
    """Parse a "flexible" amount and return it signed, or ``None``.

    Accepts Brazilian (``"1.234,56"``) and US (``"1,234.56"``) separators,
    currency symbols, parentheses, leading/trailing minus and debit/credit
    marker tokens.

    >>> parse_amount("R$ 1.234,56")
    Decimal('1234.56')
    >>> parse_amount("(500)")
    Decimal('-500')
    """

    kind = cell_kind(value)
    if kind is CellKind.NUMBER:
        try:
            amount = value if isinstance(value, Decimal) else Decimal(str(value))
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None
    if kind is CellKind.TEXT:
        return _parse_amount_text(cell_text(value))
    return None


__all__ = ["looks_like_date", "parse_amount", "parse_date"]
