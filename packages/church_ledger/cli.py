"""CLI for the ``church_ledger`` package.

This module exposes callable command handlers (``cmd_parse``, ``cmd_audit``)
and a Typer-based console interface around them. A local ``.env`` is loaded
with ``python-dotenv`` before any command runs so that
``CHURCH_LEDGER_LOG_LEVEL`` can be set per working directory. Import logic
lives in :mod:`church_ledger.importer` and :mod:`church_ledger.ingest`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import ArgumentInfo

from .errors import LedgerImportError
from .handoff import build_import_audit
from .logging_setup import configure_logging
from .models import ImportResult


# ---- Small module-level helpers used by CLI commands -------------------------


def _import_path(path: Path) -> ImportResult | None:
    """Import ``path``, printing a user-facing error and returning ``None`` on failure."""

    from .ingest.utils import import_file

    if not path.is_file():
        print(f"Error: file not found: {path}", file=sys.stderr)
        return None
    try:
        return import_file(path)
    except LedgerImportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None


def _format_summary(result: ImportResult) -> str:
    lines = [
        f"Records: {len(result.records)}",
        f"Errors: {len(result.errors)}",
        f"Total income: {result.total_income}",
        f"Total expense: {result.total_expense}",
        f"Net total: {result.net_total}",
    ]
    for r in result.records:
        lines.append(
            f"  {r.date}  {r.type.value:<7}  {r.category:<15}  {r.amount:>12}  {r.description}"
        )
    for e in result.errors:
        lines.append(f"  row {e.row_number}: {e.message}")
    return "\n".join(lines)


def cmd_parse(path: str | Path, *, as_json: bool = False) -> int:
    """Import a file and print a summary (or the full result as JSON).

    Returns the process exit code: ``0`` on success, ``1`` when the file is
    missing, has an unsupported format or cannot be decoded. Row-level
    errors do not affect the exit code.
    """

    result = _import_path(Path(path))
    if result is None:
        return 1
    if as_json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(_format_summary(result))
    return 0


def cmd_audit(path: str | Path) -> int:
    """Import a file and print the audit entry a confirmed import would record."""

    p = Path(path)
    result = _import_path(p)
    if result is None:
        return 1
    entry = build_import_audit(result, file_name=p.name, file_size=p.stat().st_size)
    print(entry.model_dump_json(indent=2))
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Import church bookkeeping spreadsheets (tithes, offerings, expenses) "
        "from CSV or Excel exports. Loads a local .env before running."
    ),
)

# Module-level argument object to satisfy ruff B008 (no calls in parameter
# defaults).
FILE_ARGUMENT: ArgumentInfo = typer.Argument(
    ...,
    help="CSV/TXT/TSV, XLSX or XLS file to import",
    dir_okay=False,
    file_okay=True,
    exists=False,  # handlers report missing files themselves
)


@app.command("parse")
def parse_cmd(
    file: Annotated[Path, FILE_ARGUMENT],
    *,
    as_json: bool = typer.Option(False, "--json", help="Print the full import result as JSON."),
) -> None:
    """Parse a file and report records, row errors and totals."""

    rc = cmd_parse(file, as_json=as_json)
    if rc:
        raise typer.Exit(rc)


@app.command("audit")
def audit_cmd(file: Annotated[Path, FILE_ARGUMENT]) -> None:
    """Print the file-import audit entry for a file as JSON."""

    rc = cmd_audit(file)
    if rc:
        raise typer.Exit(rc)


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, ...). Falls back to CHURCH_LEDGER_LOG_LEVEL.",
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level, force=True)


def main(argv: list[str] | None = None) -> int:
    """Console-script entry point; returns the process exit code."""

    try:
        app(args=argv, prog_name="church-ledger")
    except SystemExit as e:
        code = e.code
        if isinstance(code, int):
            return code
        return 0 if code is None else 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
