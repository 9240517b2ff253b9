"""Table decoders and file-level import entry points."""

from __future__ import annotations

from .utils import decode_table, import_file, load_raw_table

__all__ = ["decode_table", "import_file", "load_raw_table"]
