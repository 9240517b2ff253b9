"""church_ledger: heuristic importer for church bookkeeping spreadsheets.

Public exports
--------------
- ``parse_table`` turns a decoded table into an ``ImportResult``
- ``import_file`` decodes a CSV/XLSX/XLS file from disk and imports it
- result records and DTOs from ``church_ledger.models``
- persistence payload builders from ``church_ledger.handoff``
"""

from __future__ import annotations

from .errors import LedgerImportError, TableDecodeError, UnsupportedFormatError
from .handoff import LedgerBatches, build_import_audit, build_ledger_entries
from .importer import parse_table, summarize_totals
from .ingest.utils import decode_table, import_file, load_raw_table
from .models import (
    ImportAuditEntry,
    ImportResult,
    LedgerEntry,
    NormalizedRecord,
    RowError,
    TransactionType,
)

__all__ = [
    "ImportAuditEntry",
    "ImportResult",
    "LedgerBatches",
    "LedgerEntry",
    "LedgerImportError",
    "NormalizedRecord",
    "RowError",
    "TableDecodeError",
    "TransactionType",
    "UnsupportedFormatError",
    "build_import_audit",
    "build_ledger_entries",
    "decode_table",
    "import_file",
    "load_raw_table",
    "parse_table",
    "summarize_totals",
]
