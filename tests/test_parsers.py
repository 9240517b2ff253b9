from datetime import date, datetime
from decimal import Decimal

import pytest

from church_ledger.parsers import looks_like_date, parse_amount, parse_date


@pytest.mark.parametrize(
    "raw",
    [
        "01/03/2024",
        "1/3/2024",
        "2024-03-01",
        "2024-3-1",
        "01-03-2024",
        "01.03.2024",
        "20240301",
        "01032024",
        "01/03/2024 10:45",
        "2024-03-01T10:45:00",
    ],
)
def test_date_formats_to_iso(raw):
    assert parse_date(raw) == "2024-03-01"


def test_native_dates_pass_through():
    assert parse_date(date(2024, 3, 1)) == "2024-03-01"
    assert parse_date(datetime(2024, 3, 1, 23, 59)) == "2024-03-01"


def test_spreadsheet_serial_dates():
    # 45292 is 2024-01-01 in the 1900 date system.
    assert parse_date(45292) == "2024-01-01"
    assert parse_date(45352.0) == "2024-03-01"


def test_generic_fallback_parses_day_first():
    assert parse_date("1 March 2024") == "2024-03-01"
    assert parse_date("March 5, 2024") == "2024-03-05"


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "Dízimo", "32/01/2024", "01/03/1850", "1.234,56", "150,00 D", "2024", True],
)
def test_unparseable_dates_return_none(raw):
    assert parse_date(raw) is None


def test_out_of_range_fixed_formats_are_not_reinterpreted():
    # A fixed-format date that fails validation must not fall through to the
    # generic parser, which would read 2024-13-01 as 13 January.
    assert parse_date("2024-13-01") is None
    assert parse_date("2024-00-10") is None
    assert parse_date("13/13/2024") is None
    assert looks_like_date("2024-13-01") is False


def test_year_bounds_are_inclusive():
    assert parse_date("01/01/1900") == "1900-01-01"
    assert parse_date("31/12/2100") == "2100-12-31"
    assert parse_date("01/01/2101") is None


def test_bare_numbers_never_look_like_dates():
    assert looks_like_date(45352) is False
    assert looks_like_date("01/03/2024") is True
    assert looks_like_date(datetime(2024, 3, 1)) is True
    assert looks_like_date("Oferta") is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1.234,56", Decimal("1234.56")),
        ("1,234.56", Decimal("1234.56")),
        ("(500)", Decimal("-500")),
        ("-500", Decimal("-500")),
        ("500-", Decimal("-500")),
        ("R$ 1.234,56", Decimal("1234.56")),
        ("R$ -80,50", Decimal("-80.50")),
        ("$1,234.56", Decimal("1234.56")),
        ("USD 10", Decimal("10")),
        ("150,00 D", Decimal("-150.00")),
        ("150,00 C", Decimal("150.00")),
        ("12,5", Decimal("12.5")),
        ("1,234", Decimal("1234")),
        ("1.234.567", Decimal("1234567")),
        ("1 234,56", Decimal("1234.56")),
        ("+25", Decimal("25")),
        ("-(500)", Decimal("-500")),
        ("80.50", Decimal("80.50")),
    ],
)
def test_flexible_amounts(raw, expected):
    assert parse_amount(raw) == expected


def test_numeric_cells_keep_their_value():
    assert parse_amount(150) == Decimal("150")
    assert parse_amount(80.5) == Decimal("80.5")
    assert parse_amount(Decimal("-3.10")) == Decimal("-3.10")


@pytest.mark.parametrize(
    "raw", [None, "", "Dízimo", "abc", "-", "()", True, float("nan"), "10-20", "5+5", "01-03-2024"]
)
def test_unparseable_amounts_return_none(raw):
    assert parse_amount(raw) is None
