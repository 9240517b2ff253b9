"""Payload builders for the persistence hand-off.

Once a reviewer confirms an import, accepted records are written to two
category-specific ledgers (donations and expenses) and one audit row
describes the file. This module only shapes those payloads as validated
pydantic models; writing them is the caller's job.
"""

from __future__ import annotations

import mimetypes
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from .importer import summarize_totals
from .models import (
    ExpenseCategory,
    ImportAuditEntry,
    ImportResult,
    ImportType,
    IncomeCategory,
    LedgerEntry,
    NormalizedRecord,
    TransactionType,
)


class LedgerBatches(NamedTuple):
    income: tuple[LedgerEntry, ...]
    expense: tuple[LedgerEntry, ...]


def _entry(record: NormalizedRecord, default_category: str) -> LedgerEntry:
    return LedgerEntry(
        entry_date=record.date,
        amount=record.amount,
        category=record.category or default_category,
        description=record.description,
        donor=record.donor,
    )


def build_ledger_entries(records: Iterable[NormalizedRecord]) -> LedgerBatches:
    """Split accepted records into donation rows and expense rows.

    Income rows carry the donation type as ``category`` (``offering`` when
    missing); expense rows default to ``other``.
    """

    income: list[LedgerEntry] = []
    expense: list[LedgerEntry] = []
    for r in records:
        if r.type is TransactionType.INCOME:
            income.append(_entry(r, IncomeCategory.OFFERING.value))
        elif r.type is TransactionType.EXPENSE:
            expense.append(_entry(r, ExpenseCategory.OTHER.value))
    return LedgerBatches(tuple(income), tuple(expense))


def _import_type(records: Sequence[NormalizedRecord]) -> ImportType:
    has_income = any(r.type is TransactionType.INCOME for r in records)
    has_expense = any(r.type is TransactionType.EXPENSE for r in records)
    if has_income and has_expense:
        return ImportType.MIXED
    if has_income:
        return ImportType.DONATIONS
    return ImportType.EXPENSES


def build_import_audit(
    result: ImportResult,
    *,
    file_name: str,
    file_size: int,
    file_type: str | None = None,
    records: Sequence[NormalizedRecord] | None = None,
) -> ImportAuditEntry:
    """Build the file-level audit entry for a confirmed import.

    Parameters
    ----------
    result:
        The importer's output; its errors become the failure count and log.
    file_name, file_size:
        Original upload name and size in bytes.
    file_type:
        MIME type of the upload; guessed from ``file_name`` when omitted.
    records:
        The records actually accepted after review (edited or pruned).
        Defaults to ``result.records``. Totals are recomputed from these.
    """

    accepted = tuple(result.records if records is None else records)
    income, expense = summarize_totals(accepted)
    if file_type is None:
        file_type = mimetypes.guess_type(file_name)[0] or "unknown"

    return ImportAuditEntry(
        file_name=file_name,
        file_type=file_type,
        file_size=file_size,
        records_imported=len(accepted),
        records_failed=len(result.errors),
        total_amount=income - expense,
        import_type=_import_type(accepted),
        error_log=[e.to_dict() for e in result.errors] or None,
        imported_data=[r.to_dict() for r in accepted],
    )


__all__ = ["LedgerBatches", "build_import_audit", "build_ledger_entries"]
