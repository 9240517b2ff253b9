"""Exception types for file-level and decoder-level import failures.

Row-level problems are never raised; they are reported as
:class:`church_ledger.models.RowError` entries on the import result. The
exceptions below cover the cases where no partial table exists to recover
from, and are meant to propagate to the caller.
"""

from __future__ import annotations


class LedgerImportError(Exception):
    """Base class for import failures surfaced to the caller."""


class UnsupportedFormatError(LedgerImportError):
    """The file's container format has no table decoder (e.g. ``.pdf``)."""

    def __init__(self, message: str, *, extension: str | None = None) -> None:
        super().__init__(message)
        self.extension = extension


class TableDecodeError(LedgerImportError):
    """A decoder could not turn the file bytes into a raw table.

    Always raised ``from`` the underlying library error so the original
    traceback stays attached.
    """


__all__ = ["LedgerImportError", "TableDecodeError", "UnsupportedFormatError"]
