"""Decoder for Office Open XML workbooks (``.xlsx``/``.xlsm``).

Only the first worksheet is read. Cells come back as openpyxl materializes
them with ``data_only=True``: cached formula results, ``int``/``float``
numbers, ``datetime`` for date-formatted cells, ``str`` and ``None``.
"""

from __future__ import annotations

import io
import zipfile
from datetime import time
from os import PathLike
from typing import BinaryIO

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ...cells import Cell, RawTable
from ...errors import TableDecodeError
from ...logging_setup import get_logger

_logger = get_logger("church_ledger.ingest.spreadsheet")


def _cell(value: object) -> Cell:
    # Time-only cells and other exotic values are handed over as text.
    if value is None or isinstance(value, (str, int, float)):
        return value
    if isinstance(value, time):
        return value.isoformat()
    if hasattr(value, "year"):
        return value  # date/datetime
    return str(value)


def read_workbook(source: bytes | str | PathLike[str] | BinaryIO) -> RawTable:
    """Read the first sheet of a workbook into a raw table."""

    stream = io.BytesIO(source) if isinstance(source, bytes) else source
    try:
        wb = load_workbook(stream, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise TableDecodeError(f"could not open workbook: {exc}") from exc

    try:
        sheets = wb.sheetnames
        if not sheets:
            return []
        if len(sheets) > 1:
            _logger.info("workbook has %d sheets; only %r is imported", len(sheets), sheets[0])
        ws = wb[sheets[0]]
        table: list[list[Cell]] = [
            [_cell(v) for v in row] for row in ws.iter_rows(values_only=True)
        ]
    finally:
        wb.close()

    _logger.debug("read %d row(s) from sheet %r", len(table), sheets[0])
    return table


__all__ = ["read_workbook"]
