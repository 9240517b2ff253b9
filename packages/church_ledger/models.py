"""Data models for ``church_ledger``.

Importer output (:class:`NormalizedRecord`, :class:`RowError`,
:class:`ImportResult`) and the per-table :class:`ColumnRoleMap` are frozen
``dataclass`` objects: they are created once by the row pipeline and never
mutated afterwards. Payloads handed to the persistence collaborator are
pydantic models so they validate and serialize to JSON in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .cells import Cell, cell_text
from .parsers import parse_date

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class TransactionType(str, Enum):
    """Income/expense classification.

    ``UNKNOWN`` is transient: the classifier resolves it (to ``INCOME``, by
    policy) before a record is emitted, so it never appears on a
    :class:`NormalizedRecord`.
    """

    INCOME = "income"
    EXPENSE = "expense"
    UNKNOWN = "unknown"


class IncomeCategory(str, Enum):
    TITHE = "tithe"
    OFFERING = "offering"
    SPECIAL_PROJECT = "special_project"
    CAMPAIGN = "campaign"


class ExpenseCategory(str, Enum):
    MAINTENANCE = "maintenance"
    UTILITIES = "utilities"
    SALARIES = "salaries"
    EVENTS = "events"
    MISSIONS = "missions"
    SUPPLIES = "supplies"
    OTHER = "other"


class Role(str, Enum):
    """Semantic purpose a physical column can serve."""

    DATE = "date"
    DESCRIPTION = "description"
    AMOUNT = "amount"
    TYPE = "type"
    DONOR = "donor"


UNRESOLVED = -1

# ---------------------------------------------------------------------------
# Column roles
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ColumnRoleMap:
    """Column index per role; ``UNRESOLVED`` (-1) when no column was found.

    Computed once per table. Two roles may share an index when headers are
    ambiguous; that ambiguity is kept as found.
    """

    date: int = UNRESOLVED
    description: int = UNRESOLVED
    amount: int = UNRESOLVED
    type: int = UNRESOLVED
    donor: int = UNRESOLVED

    def get(self, role: Role) -> int:
        return getattr(self, role.value)

    def is_resolved(self, role: Role) -> bool:
        return self.get(role) != UNRESOLVED

    def unresolved(self) -> tuple[Role, ...]:
        return tuple(r for r in Role if not self.is_resolved(r))

    def with_role(self, role: Role, index: int) -> ColumnRoleMap:
        values = {r.value: self.get(r) for r in Role}
        values[role.value] = index
        return ColumnRoleMap(**values)

    def as_dict(self) -> dict[str, int]:
        return {r.value: self.get(r) for r in Role}


# ---------------------------------------------------------------------------
# Importer output
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NormalizedRecord:
    """One importable transaction reconstructed from a single raw row.

    ``amount`` is always a positive magnitude; the sign of the source value
    is consumed by classification and lives on in ``type`` only.
    """

    date: str
    description: str
    amount: Decimal
    type: TransactionType
    category: str
    donor: str | None = None
    raw_row: tuple[Cell, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "description": self.description,
            "amount": str(self.amount),
            "type": self.type.value,
            "category": self.category,
            "donor": self.donor,
            "raw_row": [cell_text(c) for c in self.raw_row],
        }


@dataclass(frozen=True, slots=True)
class RowError:
    """A row that produced no record.

    ``row_number`` is the 1-based position in the original table, header row
    included; file-level errors use ``0``.
    """

    row_number: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row_number, "message": self.message}


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Outcome of one import run.

    ``total_income``/``total_expense`` are computed at import time from
    ``records``. Consumers that add, drop or edit records must recompute them
    (see :func:`church_ledger.importer.summarize_totals`).
    """

    records: tuple[NormalizedRecord, ...] = ()
    errors: tuple[RowError, ...] = ()
    headers: tuple[str, ...] = ()
    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")

    @property
    def net_total(self) -> Decimal:
        return self.total_income - self.total_expense

    def to_dict(self) -> dict[str, Any]:
        return {
            "records": [r.to_dict() for r in self.records],
            "errors": [e.to_dict() for e in self.errors],
            "headers": list(self.headers),
            "total_income": str(self.total_income),
            "total_expense": str(self.total_expense),
        }


# ---------------------------------------------------------------------------
# DTOs for the persistence hand-off
# ---------------------------------------------------------------------------


class LedgerEntry(BaseModel):
    """A row destined for one of the two category-specific ledgers.

    Income records land in the donations ledger (``category`` holds the
    donation type), expense records in the expenses ledger. ``entry_date``
    is the record's ISO string as emitted by the importer: year, month and
    day are range-checked but not cross-checked against the calendar.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, frozen=True)

    entry_date: str
    amount: Decimal
    category: str
    description: str
    donor: str | None = None

    @field_validator("entry_date")
    @classmethod
    def _entry_date_iso(cls, v: str) -> str:
        if parse_date(v) != v:
            raise ValueError("entry_date must be an ISO YYYY-MM-DD string")
        return v

    @field_validator("amount")
    @classmethod
    def _amount_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("amount must be a positive magnitude")
        return v

    @field_validator("description")
    @classmethod
    def _description_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description must be non-empty")
        return v


class ImportType(str, Enum):
    DONATIONS = "donations"
    EXPENSES = "expenses"
    MIXED = "mixed"


class ImportAuditEntry(BaseModel):
    """File-level audit record written alongside the accepted entries."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    file_name: str
    file_type: str
    file_size: int
    records_imported: int
    records_failed: int
    total_amount: Decimal
    import_type: ImportType
    status: str = "completed"
    error_log: list[dict[str, Any]] | None = None
    imported_data: list[dict[str, Any]]

    @field_validator("file_size", "records_imported", "records_failed")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("counts and sizes must be >= 0")
        return v


__all__ = [
    "UNRESOLVED",
    "ColumnRoleMap",
    "ExpenseCategory",
    "ImportAuditEntry",
    "ImportResult",
    "ImportType",
    "IncomeCategory",
    "LedgerEntry",
    "NormalizedRecord",
    "Role",
    "RowError",
    "TransactionType",
]
