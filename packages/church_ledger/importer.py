"""Row pipeline: raw table in, normalized records and row errors out.

Per file the pipeline moves through ``decoded -> header located -> columns
resolved -> rows parsed -> aggregated``. Columns are resolved once per file;
a row whose resolved cells do not parse falls back to scanning the whole row.
A row that still lacks a date or a non-zero amount becomes a
:class:`~church_ledger.models.RowError` and processing continues.

:func:`parse_table` is pure: it keeps no state between calls and never
raises for row-level problems.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from .cells import RawRow, RawTable, cell_at, cell_text, is_empty
from .classify import classify_transaction
from .columns import resolve_columns
from .describe import synthesize_description
from .header import locate_header_row
from .logging_setup import get_logger
from .models import (
    UNRESOLVED,
    ColumnRoleMap,
    ImportResult,
    NormalizedRecord,
    RowError,
    TransactionType,
)
from .parsers import looks_like_date, parse_amount, parse_date

_logger = get_logger("church_ledger.importer")

EMPTY_FILE_MESSAGE = "Arquivo vazio ou sem dados"
INVALID_DATE_MESSAGE = "Data inválida ou ausente"
INVALID_AMOUNT_MESSAGE = "Valor inválido ou ausente"

_ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# Row helpers
# ---------------------------------------------------------------------------


def is_blank_row(row: RawRow) -> bool:
    """Every cell empty, or the only non-empty cells are dates (spacer lines)."""

    return all(is_empty(c) or looks_like_date(c) for c in row)


def _row_date(row: RawRow, roles: ColumnRoleMap) -> tuple[str | None, int]:
    """Return ``(iso_date, column)``; column is ``UNRESOLVED`` when not found."""

    if roles.date != UNRESOLVED:
        iso = parse_date(cell_at(row, roles.date))
        if iso is not None:
            return iso, roles.date
    for idx, value in enumerate(row):
        if looks_like_date(value):
            iso = parse_date(value)
            if iso is not None:
                return iso, idx
    return None, UNRESOLVED


def _row_amount(row: RawRow, roles: ColumnRoleMap, date_index: int) -> Decimal | None:
    """Return the signed, non-zero amount of ``row`` or ``None``.

    Only an unparseable resolved cell falls back to the row scan; a zero in
    the amount column is final.
    """

    if roles.amount != UNRESOLVED:
        amount = parse_amount(cell_at(row, roles.amount))
        if amount is not None:
            return amount if amount != _ZERO else None
    skip = {date_index, roles.date}
    for idx, value in enumerate(row):
        if idx in skip or looks_like_date(value):
            continue
        amount = parse_amount(value)
        if amount is not None and amount != _ZERO:
            return amount
    return None


def _optional_text(row: RawRow, idx: int) -> str | None:
    return cell_text(cell_at(row, idx)) or None


def _parse_row(
    row: RawRow, headers: Sequence[str], roles: ColumnRoleMap, row_number: int
) -> NormalizedRecord | RowError:
    iso_date, date_index = _row_date(row, roles)
    if iso_date is None:
        return RowError(row_number, INVALID_DATE_MESSAGE)

    amount = _row_amount(row, roles, date_index)
    if amount is None:
        return RowError(row_number, INVALID_AMOUNT_MESSAGE)

    description = synthesize_description(row, headers, roles.description)
    type_text = _optional_text(row, roles.type)
    classification = classify_transaction(description, amount, type_text)

    return NormalizedRecord(
        date=iso_date,
        description=description,
        amount=abs(amount),
        type=classification.type,
        category=classification.category,
        donor=_optional_text(row, roles.donor),
        raw_row=tuple(row),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def summarize_totals(records: Iterable[NormalizedRecord]) -> tuple[Decimal, Decimal]:
    """Return ``(total_income, total_expense)`` over ``records``.

    Exposed so that callers editing records after import can recompute the
    totals the same way the importer does.
    """

    income = expense = _ZERO
    for r in records:
        if r.type is TransactionType.INCOME:
            income += r.amount
        elif r.type is TransactionType.EXPENSE:
            expense += r.amount
    return income, expense


def parse_table(table: RawTable) -> ImportResult:
    """Turn a decoded table into an :class:`ImportResult`.

    Row numbers on errors are 1-based positions in ``table`` (header and
    preamble rows included). Tables with fewer than two rows yield a single
    file-level error numbered ``0``.
    """

    if len(table) < 2:
        _logger.info("table has %d row(s); nothing to import", len(table))
        return ImportResult(errors=(RowError(0, EMPTY_FILE_MESSAGE),))

    header_index = locate_header_row(table)
    headers = tuple(cell_text(c) for c in table[header_index])
    data_rows = table[header_index + 1 :]
    roles = resolve_columns(headers, data_rows)

    records: list[NormalizedRecord] = []
    errors: list[RowError] = []
    skipped = 0
    for offset, row in enumerate(data_rows):
        row_number = header_index + offset + 2
        if is_blank_row(row):
            skipped += 1
            continue
        outcome = _parse_row(row, headers, roles, row_number)
        if isinstance(outcome, RowError):
            _logger.debug("row %d rejected: %s", row_number, outcome.message)
            errors.append(outcome)
        else:
            records.append(outcome)

    total_income, total_expense = summarize_totals(records)
    _logger.info(
        "parsed %d record(s), %d error(s), %d blank row(s) skipped",
        len(records),
        len(errors),
        skipped,
    )
    return ImportResult(
        records=tuple(records),
        errors=tuple(errors),
        headers=headers,
        total_income=total_income,
        total_expense=total_expense,
    )


__all__ = [
    "EMPTY_FILE_MESSAGE",
    "INVALID_AMOUNT_MESSAGE",
    "INVALID_DATE_MESSAGE",
    "is_blank_row",
    "parse_table",
    "summarize_totals",
]
