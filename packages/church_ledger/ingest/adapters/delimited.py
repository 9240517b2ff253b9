"""Decoder for delimited text exports (CSV, semicolon and tab separated).

Contract
--------
- Input is text, bytes, or an open text stream.
- Bytes decode as UTF-8 (a BOM is tolerated) and fall back to cp1252, the
  encoding older Brazilian bank exports and Excel "CSV (separado por
  vírgulas)" saves use.
- The delimiter is sniffed among ``, ; <tab> |`` from a prefix of the text;
  when sniffing is inconclusive ``,`` is used.
- Every cell comes back as ``str`` (blank cells as ``""``); typing is left to
  the importer's parsers.
"""

from __future__ import annotations

import csv
import io
from typing import TextIO

from ...cells import RawTable
from ...errors import TableDecodeError
from ...logging_setup import get_logger

_logger = get_logger("church_ledger.ingest.delimited")

DELIMITERS = ",;\t|"
_SNIFF_BYTES = 8192
_ENCODINGS = ("utf-8-sig", "cp1252")


def decode_bytes(data: bytes) -> str:
    """Decode raw file bytes trying each supported encoding in order."""

    last_exc: UnicodeDecodeError | None = None
    for encoding in _ENCODINGS:
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError as exc:
            last_exc = exc
            continue
        _logger.debug("decoded %d bytes as %s", len(data), encoding)
        return text
    raise TableDecodeError("could not decode delimited file as UTF-8 or cp1252") from last_exc


def sniff_delimiter(sample: str) -> str:
    """Return the delimiter used by ``sample``, defaulting to ``,``."""

    if not sample.strip():
        return ","
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=DELIMITERS)
    except csv.Error:
        return ","
    return dialect.delimiter


def read_delimited(source: str | bytes | TextIO) -> RawTable:
    """Decode delimited text into a list of rows of string cells.

    Trailing fully-empty lines are kept as empty rows; the importer skips
    them as blank rows.
    """

    if isinstance(source, bytes):
        text = decode_bytes(source)
    elif isinstance(source, str):
        text = source
    else:
        text = source.read()
    # A BOM can survive when text was read with plain "utf-8".
    text = text.removeprefix("\ufeff")

    delimiter = sniff_delimiter(text[:_SNIFF_BYTES])
    _logger.debug("using delimiter %r", delimiter)
    try:
        return [list(row) for row in csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)]
    except csv.Error as exc:
        raise TableDecodeError(f"malformed delimited text: {exc}") from exc


__all__ = ["DELIMITERS", "decode_bytes", "read_delimited", "sniff_delimiter"]
