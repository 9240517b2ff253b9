from decimal import Decimal

import pytest
from conftest import SCENARIO_A_CSV
from pydantic import ValidationError

from church_ledger.handoff import build_import_audit, build_ledger_entries
from church_ledger.importer import parse_table
from church_ledger.ingest.adapters.delimited import read_delimited
from church_ledger.models import ImportResult, ImportType, LedgerEntry, RowError


def _scenario_a():
    return parse_table(read_delimited(SCENARIO_A_CSV))


def test_records_split_into_two_ledgers():
    batches = build_ledger_entries(_scenario_a().records)

    (donation,) = batches.income
    assert donation.entry_date == "2024-03-01"
    assert donation.category == "tithe"
    assert donation.amount == Decimal("150.00")

    (expense,) = batches.expense
    assert expense.category == "utilities"
    assert expense.description == "Conta de Luz"


def test_audit_entry_for_mixed_import():
    result = _scenario_a()
    audit = build_import_audit(result, file_name="extrato.csv", file_size=96)

    assert audit.file_type == "text/csv"
    assert audit.records_imported == 2
    assert audit.records_failed == 0
    assert audit.total_amount == Decimal("69.50")
    assert audit.import_type is ImportType.MIXED
    assert audit.status == "completed"
    assert audit.error_log is None
    assert audit.imported_data[0]["category"] == "tithe"


def test_audit_uses_reviewed_records_and_keeps_errors():
    result = _scenario_a()
    kept = [r for r in result.records if r.category == "utilities"]
    with_errors = ImportResult(
        records=result.records, errors=(RowError(4, "Data inválida ou ausente"),)
    )

    audit = build_import_audit(
        with_errors,
        file_name="x.xlsx",
        file_size=10,
        file_type="application/octet-stream",
        records=kept,
    )
    assert audit.records_imported == 1
    assert audit.records_failed == 1
    assert audit.total_amount == Decimal("-80.50")
    assert audit.import_type is ImportType.EXPENSES
    assert audit.error_log == [{"row": 4, "message": "Data inválida ou ausente"}]


def test_ledger_entries_reject_non_positive_amounts():
    with pytest.raises(ValidationError):
        LedgerEntry(
            entry_date="2024-03-01", amount=Decimal("0"), category="other", description="x"
        )


def test_loose_calendar_dates_reach_the_ledger():
    # Day-of-month is range-checked only, so 31/02 is a valid import.
    result = parse_table([["Data", "Descrição", "Valor"], ["31/02/2024", "Dízimo", "100,00"]])
    assert result.records[0].date == "2024-02-31"

    (donation,) = build_ledger_entries(result.records).income
    assert donation.entry_date == "2024-02-31"
    assert donation.amount == Decimal("100.00")
    assert build_import_audit(result, file_name="f.csv", file_size=1).records_imported == 1


@pytest.mark.parametrize("bad", ["2024-13-01", "01/03/2024", "2024-3-1", "ontem"])
def test_ledger_entries_require_iso_dates(bad):
    with pytest.raises(ValidationError):
        LedgerEntry(entry_date=bad, amount=Decimal("1"), category="other", description="x")
