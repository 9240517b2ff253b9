"""Decoder for legacy BIFF workbooks (``.xls``) via ``xlrd``.

Contract mirrors :mod:`.spreadsheet`: only the first worksheet is read and
cells are handed over as ``str``, ``float``, ``datetime`` or ``None``.
Date-formatted cells are converted with the workbook's own date mode so
1904-based files decode correctly.
"""

from __future__ import annotations

from os import PathLike, fspath
from typing import BinaryIO

import xlrd
from xlrd.compdoc import CompDocError
from xlrd.sheet import Cell as XlrdCell
from xlrd.xldate import XLDateError

from ...cells import Cell, RawTable
from ...errors import TableDecodeError
from ...logging_setup import get_logger

_logger = get_logger("church_ledger.ingest.legacy_spreadsheet")


def _cell(cell: XlrdCell, datemode: int) -> Cell:
    ctype = cell.ctype
    if ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if ctype == xlrd.XL_CELL_DATE:
        try:
            return xlrd.xldate_as_datetime(cell.value, datemode)
        except (XLDateError, ValueError, OverflowError):
            return cell.value
    if ctype == xlrd.XL_CELL_NUMBER:
        return cell.value
    if ctype == xlrd.XL_CELL_BOOLEAN:
        return "TRUE" if cell.value else "FALSE"
    if ctype == xlrd.XL_CELL_ERROR:
        # "#N/A", "#DIV/0!" and friends read as text.
        return xlrd.error_text_from_code.get(cell.value, "#ERR")
    return cell.value


def _read_bytes(source: bytes | str | PathLike[str] | BinaryIO) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, (str, PathLike)):
        with open(fspath(source), "rb") as fh:
            return fh.read()
    return source.read()


def read_legacy_workbook(source: bytes | str | PathLike[str] | BinaryIO) -> RawTable:
    """Read the first sheet of an ``.xls`` workbook into a raw table."""

    try:
        book = xlrd.open_workbook(file_contents=_read_bytes(source), on_demand=True)
    except (xlrd.XLRDError, CompDocError, OSError) as exc:
        raise TableDecodeError(f"could not open legacy workbook: {exc}") from exc

    try:
        if book.nsheets == 0:
            return []
        names = book.sheet_names()
        if len(names) > 1:
            _logger.info("workbook has %d sheets; only %r is imported", len(names), names[0])
        sheet = book.sheet_by_index(0)
        table: list[list[Cell]] = [
            [_cell(c, book.datemode) for c in sheet.row(r)] for r in range(sheet.nrows)
        ]
    finally:
        book.release_resources()

    _logger.debug("read %d row(s) from sheet %r", len(table), names[0])
    return table


__all__ = ["read_legacy_workbook"]
