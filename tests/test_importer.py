from decimal import Decimal

from conftest import SCENARIO_A_CSV

from church_ledger.columns import match_header_names, resolve_columns
from church_ledger.importer import (
    EMPTY_FILE_MESSAGE,
    INVALID_AMOUNT_MESSAGE,
    INVALID_DATE_MESSAGE,
    is_blank_row,
    parse_table,
    summarize_totals,
)
from church_ledger.ingest.adapters.delimited import read_delimited
from church_ledger.models import ColumnRoleMap, RowError, TransactionType


def _polish_table():
    headers = ["Rodzaj", "Dzień", "Opis", "Kwota"]
    rows = []
    for day in range(1, 21):
        when = f"{day:02d}/03/2024" if day != 7 else "brak"
        rows.append(["Wpływ", when, f"Dízimo família {day}", f"{day * 10},00"])
    return [headers, *rows]


def test_scenario_a_portuguese_csv():
    result = parse_table(read_delimited(SCENARIO_A_CSV))

    assert result.errors == ()
    assert len(result.records) == 2

    tithe, bill = result.records
    assert (tithe.date, tithe.description) == ("2024-03-01", "Dízimo")
    assert tithe.amount == Decimal("150.00")
    assert tithe.type is TransactionType.INCOME
    assert tithe.category == "tithe"

    assert (bill.date, bill.description) == ("2024-03-02", "Conta de Luz")
    assert bill.amount == Decimal("80.50")
    assert bill.type is TransactionType.EXPENSE
    assert bill.category == "utilities"

    assert result.total_income == Decimal("150.00")
    assert result.total_expense == Decimal("80.50")
    assert result.net_total == Decimal("69.50")
    assert result.headers == ("Data", "Descrição", "Valor")


def test_scenario_b_explicit_debit_marker():
    table = [["Date", "Note", "Amount", "Type"], ["2024-03-01", "Rent", "500", "D"]]
    result = parse_table(table)

    assert result.errors == ()
    (rec,) = result.records
    assert rec.type is TransactionType.EXPENSE
    assert rec.amount == Decimal("500")
    assert rec.category == "other"
    assert rec.description == "Rent"


def test_scenario_c_date_column_from_content():
    table = _polish_table()
    headers, data = table[0], table[1:]

    # Header names say nothing; content does.
    assert match_header_names(ColumnRoleMap(), headers, data).date == -1
    assert resolve_columns(headers, data).date == 1

    result = parse_table(table)
    assert len(result.records) == 19
    assert result.errors == (RowError(8, INVALID_DATE_MESSAGE),)
    assert result.records[0].date == "2024-03-01"
    assert result.records[0].description == "Dízimo família 1"
    assert result.records[0].category == "tithe"


def test_scenario_d_numeric_description_is_synthesized():
    table = [
        ["Data", "Descrição", "Local", "Valor"],
        ["10/03/2024", "123", "Aluguel do salão", "350,00"],
    ]
    (rec,) = parse_table(table).records
    assert rec.description == "Aluguel do salão"
    assert rec.type is TransactionType.EXPENSE
    assert rec.amount == Decimal("350.00")


def test_short_tables_yield_one_file_level_error():
    for table in ([], [["Data", "Valor"]]):
        result = parse_table(table)
        assert result.records == ()
        assert result.errors == (RowError(0, EMPTY_FILE_MESSAGE),)


def test_row_errors_are_numbered_from_table_start():
    table = [
        ["Relatório de março"],
        ["Data", "Descrição", "Valor"],
        ["01/03/2024", "Oferta", "50,00"],
        ["sem data", "Oferta", "10,00"],
        ["02/03/2024", "Oferta", "abc"],
        ["03/03/2024", "Oferta", "0,00"],
        [],
        ["04/03/2024", "", ""],
    ]
    result = parse_table(table)

    assert len(result.records) == 1
    assert result.errors == (
        RowError(4, INVALID_DATE_MESSAGE),
        RowError(5, INVALID_AMOUNT_MESSAGE),
        RowError(6, INVALID_AMOUNT_MESSAGE),
    )
    # Blank and date-only rows are neither records nor errors.
    assert len(result.records) + len(result.errors) <= len(table) - 2


def test_row_scan_fallbacks():
    table = [
        ["Data", "Descrição", "Valor", "Obs"],
        ["-", "Oferta", "25,00", "05/03/2024"],
        ["06/03/2024", "Oferta", "", "R$ 40,00"],
    ]
    first, second = parse_table(table).records
    assert (first.date, first.amount) == ("2024-03-05", Decimal("25.00"))
    assert (second.date, second.amount) == ("2024-03-06", Decimal("40.00"))


def test_zero_in_amount_column_is_an_error_not_a_scan():
    table = [
        ["Data", "Descrição", "Valor", "Documento"],
        ["01/03/2024", "Oferta", "0,00", "48213"],
        ["02/03/2024", "Oferta", 0, "48214"],
        ["03/03/2024", "Oferta", "", "R$ 40,00"],
    ]
    result = parse_table(table)

    assert result.errors == (
        RowError(2, INVALID_AMOUNT_MESSAGE),
        RowError(3, INVALID_AMOUNT_MESSAGE),
    )
    # An empty amount cell is unparseable, so the row scan still applies.
    (rec,) = result.records
    assert (rec.date, rec.amount) == ("2024-03-03", Decimal("40.00"))
    assert result.total_income == Decimal("40.00")


def test_spreadsheet_native_cells():
    table = [
        ["Data", "Descrição", "Valor", "Tipo", "Membro"],
        [45352, "Oferta", 100, "Crédito", "Maria"],
        [45353, "Conta de água", 60.5, "Débito", None],
    ]
    offering, water = parse_table(table).records
    assert offering.date == "2024-03-01"
    assert offering.donor == "Maria"
    assert offering.type is TransactionType.INCOME
    assert water.date == "2024-03-02"
    assert water.donor is None
    assert (water.type, water.category, water.amount) == (
        TransactionType.EXPENSE,
        "utilities",
        Decimal("60.5"),
    )


def test_missing_description_uses_sentinel():
    table = [["Data", "Descrição", "Valor"], ["01/03/2024", "", "20,00"]]
    (rec,) = parse_table(table).records
    assert rec.description == "Sem descrição"
    assert rec.category == "offering"


def test_parse_table_is_idempotent():
    table = read_delimited(SCENARIO_A_CSV)
    assert parse_table(table) == parse_table(table)
    assert parse_table(_polish_table()) == parse_table(_polish_table())


def test_totals_match_records():
    result = parse_table(_polish_table())
    income = sum(
        (r.amount for r in result.records if r.type is TransactionType.INCOME), Decimal("0")
    )
    expense = sum(
        (r.amount for r in result.records if r.type is TransactionType.EXPENSE), Decimal("0")
    )
    assert result.total_income == income
    assert result.total_expense == expense
    assert summarize_totals(result.records) == (income, expense)


def test_blank_rows():
    assert is_blank_row([])
    assert is_blank_row([None, "", " "])
    assert is_blank_row(["03/03/2024", "", ""])
    assert not is_blank_row(["03/03/2024", "Oferta", ""])
    assert not is_blank_row([45352, None])
