from church_ledger.header import is_header_like, locate_header_row


def test_first_row_header():
    table = [["Data", "Descrição", "Valor"], ["01/03/2024", "Dízimo", "150,00"]]
    assert locate_header_row(table) == 0


def test_skips_title_and_blank_preamble():
    table = [
        ["Igreja Batista Central - Relatório de março"],
        [],
        [None, None, None],
        ["Data", "Histórico", "Valor"],
        ["01/03/2024", "Oferta", "35,00"],
    ]
    assert locate_header_row(table) == 3


def test_defaults_to_first_row_when_nothing_qualifies():
    table = [["01/03/2024", "150,00"], ["02/03/2024", "80,00"]]
    assert locate_header_row(table) == 0


def test_scan_is_limited_to_leading_rows():
    table = [["Relatório"]] * 5 + [["Data", "Valor"]]
    assert locate_header_row(table) == 0
    assert locate_header_row(table, max_scan=6) == 5


def test_data_rows_are_not_header_like():
    assert not is_header_like(["01/03/2024", "Oferta", "150,00"])
    assert is_header_like(["Data", "Descrição", "Valor", "2024"])
    assert not is_header_like(["Somente um rótulo"])
