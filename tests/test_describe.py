from church_ledger.describe import NO_DESCRIPTION, synthesize_description

HEADERS = ["Data", "Descrição", "Local", "Valor"]


def test_usable_description_cell_is_kept_as_is():
    row = ["01/03/2024", "Dízimo", "Templo", "150,00"]
    assert synthesize_description(row, HEADERS, 1) == "Dízimo"


def test_numeric_description_is_replaced_by_text_cells():
    row = ["10/03/2024", "123", "Aluguel do salão", "350,00"]
    assert synthesize_description(row, HEADERS, 1) == "Aluguel do salão"


def test_short_description_is_replaced():
    row = ["10/03/2024", "ok", "Culto de domingo", "50,00"]
    assert synthesize_description(row, HEADERS, 1) == "Culto de domingo"


def test_multiple_text_cells_are_joined():
    row = ["01/03/2024", "", "João Silva", "Oferta missões", "50,00"]
    assert synthesize_description(row, [], -1) == "João Silva - Oferta missões"


def test_cells_repeating_their_header_are_ignored():
    row = ["01/03/2024", "--", "local", "Conferência", "50,00"]
    assert synthesize_description(row, HEADERS, 1) == "Conferência"


def test_dates_amounts_and_short_cells_are_ignored():
    row = ["01/03/2024", "", "R$ 10,00", "abc", "Mar 5, 2024"]
    assert synthesize_description(row, HEADERS, 1) == NO_DESCRIPTION
