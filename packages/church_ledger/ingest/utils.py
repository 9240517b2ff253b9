"""Ingest utilities shared by the CLI and library callers.

Picks a table decoder from the file extension, hands the decoded table to
:func:`church_ledger.importer.parse_table` and surfaces file-level failures
as exceptions (see :mod:`church_ledger.errors`).
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from ..cells import RawTable
from ..errors import UnsupportedFormatError
from ..importer import parse_table
from ..logging_setup import get_logger
from ..models import ImportResult
from .adapters.delimited import read_delimited
from .adapters.legacy_spreadsheet import read_legacy_workbook
from .adapters.spreadsheet import read_workbook

_logger = get_logger("church_ledger.ingest")

DELIMITED_EXTENSIONS = frozenset({"csv", "txt", "tsv"})
SPREADSHEET_EXTENSIONS = frozenset({"xlsx", "xlsm"})
LEGACY_SPREADSHEET_EXTENSIONS = frozenset({"xls"})

UNSUPPORTED_FORMAT_MESSAGE = "Formato de arquivo não suportado. Use Excel (.xlsx, .xls) ou CSV."
PDF_MESSAGE = (
    "Processamento de PDF requer análise avançada. "
    "Por favor, converta o PDF para Excel ou CSV primeiro."
)


def file_extension(filename: str) -> str:
    """Lowercased extension of ``filename`` without the dot (``""`` if none)."""

    return Path(filename).suffix.lower().lstrip(".")


def ensure_supported(filename: str) -> str:
    """Return the extension of ``filename`` or raise for formats without a decoder."""

    ext = file_extension(filename)
    if ext in DELIMITED_EXTENSIONS | SPREADSHEET_EXTENSIONS | LEGACY_SPREADSHEET_EXTENSIONS:
        return ext
    if ext == "pdf":
        raise UnsupportedFormatError(PDF_MESSAGE, extension=ext)
    raise UnsupportedFormatError(UNSUPPORTED_FORMAT_MESSAGE, extension=ext or None)


def decode_table(data: bytes, filename: str) -> RawTable:
    """Decode in-memory file bytes into a raw table, dispatching on ``filename``.

    Raises
    ------
    UnsupportedFormatError
        For PDFs and unknown extensions.
    TableDecodeError
        When the chosen decoder cannot read the bytes.
    """

    ext = ensure_supported(filename)
    if ext in DELIMITED_EXTENSIONS:
        return read_delimited(data)
    if ext in LEGACY_SPREADSHEET_EXTENSIONS:
        return read_legacy_workbook(data)
    return read_workbook(data)


def load_raw_table(path: str | PathLike[str]) -> RawTable:
    """Read ``path`` from disk and decode it (see :func:`decode_table`)."""

    p = Path(path)
    # Reject by extension before touching the file contents.
    ensure_supported(p.name)
    data = p.read_bytes()
    _logger.info("decoding %s (%d bytes)", p.name, len(data))
    return decode_table(data, p.name)


def import_file(path: str | PathLike[str]) -> ImportResult:
    """Decode ``path`` and run the importer over it."""

    return parse_table(load_raw_table(path))


__all__ = [
    "DELIMITED_EXTENSIONS",
    "LEGACY_SPREADSHEET_EXTENSIONS",
    "SPREADSHEET_EXTENSIONS",
    "decode_table",
    "ensure_supported",
    "file_extension",
    "import_file",
    "load_raw_table",
]
