"""Income/expense classification and category assignment.

Type is decided by the first conclusive signal, in priority order:

1. explicit type text (a type/category column), matched case- and
   diacritic-insensitively against marker tokens and indicator keywords;
2. the amount's sign: a negative amount is an expense;
3. indicator keywords found in the description;
4. policy default: anything still undecided is income.

The default in step 4 is a deliberate policy carried over from the product
this importer serves, not an inference. It silently labels ambiguous rows as
income, so it is reported separately (``source="default"``) and logged.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from decimal import Decimal
from typing import Literal, NamedTuple

from .cells import fold_text
from .logging_setup import get_logger
from .models import ExpenseCategory, IncomeCategory, TransactionType

_logger = get_logger("church_ledger.classify")

type ClassificationSource = Literal["explicit", "sign", "keyword", "default"]

# Whole-value markers for a type column ("C"/"D", "+"/"-").
_INCOME_MARKERS = frozenset({"c", "cr", "cred", "credito", "credit", "+", "entrada", "in"})
_EXPENSE_MARKERS = frozenset({"d", "db", "dr", "deb", "debito", "debit", "-", "saida", "out"})

# Indicator keywords, already folded (lowercase, no diacritics). Shared by the
# explicit-type match and the description scan.
INCOME_INDICATORS: tuple[str, ...] = (
    "receita",
    "entrada",
    "income",
    "credit",
    "credito",
    "deposito",
    "deposit",
    "dizimo",
    "oferta",
    "doacao",
    "contribuicao",
    "ingreso",
    "diezmo",
    "ofrenda",
    "donation",
    "tithe",
    "offering",
)
EXPENSE_INDICATORS: tuple[str, ...] = (
    "despesa",
    "saida",
    "expense",
    "debit",
    "debito",
    "pagamento",
    "pgto",
    "conta",
    "aluguel",
    "salario",
    "compra",
    "fornecedor",
    "tarifa",
    "gasto",
    "egreso",
    "payment",
    "withdrawal",
    "saque",
)

_INCOME_CATEGORY_KEYWORDS: tuple[tuple[IncomeCategory, tuple[str, ...]], ...] = (
    (IncomeCategory.TITHE, ("dizimo", "tithe", "diezmo")),
    (IncomeCategory.SPECIAL_PROJECT, ("projeto", "project", "proyecto", "construcao", "obra")),
    (IncomeCategory.CAMPAIGN, ("campanha", "campaign", "campana")),
    (IncomeCategory.OFFERING, ("oferta", "offering", "ofrenda", "doacao", "donation")),
)
_EXPENSE_CATEGORY_KEYWORDS: tuple[tuple[ExpenseCategory, tuple[str, ...]], ...] = (
    (
        ExpenseCategory.MAINTENANCE,
        ("manutencao", "reparo", "conserto", "reforma", "maintenance", "repair", "mantenimiento"),
    ),
    (
        ExpenseCategory.UTILITIES,
        (
            "luz",
            "energia",
            "agua",
            "telefone",
            "internet",
            "electricity",
            "water",
            "phone",
            "utility",
            "utilities",
        ),
    ),
    (ExpenseCategory.SALARIES, ("salario", "folha", "prebenda", "salary", "payroll", "sueldo")),
    (
        ExpenseCategory.EVENTS,
        ("evento", "culto", "conferencia", "retiro", "congresso", "event", "conference"),
    ),
    (ExpenseCategory.MISSIONS, ("missao", "missoes", "missionari", "mission", "mision")),
    (
        ExpenseCategory.SUPPLIES,
        ("material", "suprimento", "papelaria", "limpeza", "supplies", "insumo", "escritorio"),
    ),
)


class Classification(NamedTuple):
    type: TransactionType
    category: str
    source: ClassificationSource


def _pattern(keywords: Sequence[str]) -> re.Pattern[str]:
    # Keywords match at the start of a word ("missionario" matches "missionari").
    return re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")")


_INCOME_RE = _pattern(INCOME_INDICATORS)
_EXPENSE_RE = _pattern(EXPENSE_INDICATORS)
_INCOME_CATEGORY_RES = tuple((cat, _pattern(kws)) for cat, kws in _INCOME_CATEGORY_KEYWORDS)
_EXPENSE_CATEGORY_RES = tuple((cat, _pattern(kws)) for cat, kws in _EXPENSE_CATEGORY_KEYWORDS)


def _type_from_keywords(folded: str) -> TransactionType:
    if _INCOME_RE.search(folded):
        return TransactionType.INCOME
    if _EXPENSE_RE.search(folded):
        return TransactionType.EXPENSE
    return TransactionType.UNKNOWN


def _type_from_text(text: str) -> TransactionType:
    folded = fold_text(text)
    token = folded.strip(" .:")
    if token in _INCOME_MARKERS:
        return TransactionType.INCOME
    if token in _EXPENSE_MARKERS:
        return TransactionType.EXPENSE
    return _type_from_keywords(folded)


def detect_type(
    description: str, amount: Decimal, type_text: str | None = None
) -> TransactionType:
    """Return income/expense, or ``UNKNOWN`` when no signal is conclusive."""

    return _detect(description, amount, type_text)[0]


def _detect(
    description: str, amount: Decimal, type_text: str | None
) -> tuple[TransactionType, ClassificationSource]:
    if type_text:
        explicit = _type_from_text(type_text)
        if explicit is not TransactionType.UNKNOWN:
            return explicit, "explicit"
    if amount < 0:
        return TransactionType.EXPENSE, "sign"
    # Marker tokens only count in a type column; a description of "D" is not a debit.
    keyword = _type_from_keywords(fold_text(description))
    if keyword is not TransactionType.UNKNOWN:
        return keyword, "keyword"
    return TransactionType.UNKNOWN, "default"


def detect_category(description: str, type_: TransactionType) -> str:
    """Assign the semantic category for an already-resolved type."""

    folded = fold_text(description)
    if type_ is TransactionType.INCOME:
        for income_cat, income_re in _INCOME_CATEGORY_RES:
            if income_re.search(folded):
                return income_cat.value
        return IncomeCategory.OFFERING.value
    if type_ is TransactionType.EXPENSE:
        for expense_cat, expense_re in _EXPENSE_CATEGORY_RES:
            if expense_re.search(folded):
                return expense_cat.value
        return ExpenseCategory.OTHER.value
    raise ValueError("category assignment requires a resolved transaction type")


def classify_transaction(
    description: str, amount: Decimal, type_text: str | None = None
) -> Classification:
    """Decide type and category for one row.

    ``amount`` is the signed value as parsed. Unresolved types are settled to
    income here (see module docstring), so the result never carries
    ``UNKNOWN``.
    """

    type_, source = _detect(description, amount, type_text)
    if type_ is TransactionType.UNKNOWN:
        _logger.debug(
            "no type signal for %r (amount %s); defaulting to income", description, amount
        )
        type_ = TransactionType.INCOME
    return Classification(type_, detect_category(description, type_), source)


__all__ = [
    "EXPENSE_INDICATORS",
    "INCOME_INDICATORS",
    "Classification",
    "classify_transaction",
    "detect_category",
    "detect_type",
]
