"""Column resolution: map each role to a physical column index.

Resolution runs an ordered list of strategies over a partial
:class:`~church_ledger.models.ColumnRoleMap`. Each strategy only fills roles
that are still unresolved and hands the map on:

1. :func:`match_header_names` compares normalized header labels with curated
   synonym lists (Portuguese/English/Spanish banking and bookkeeping terms).
2. :func:`infer_from_content` profiles the sampled data rows and assigns the
   date, amount and description roles from the columns' statistical shape.

A role that survives both strategies stays ``UNRESOLVED``; the row pipeline
compensates by scanning whole rows.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .cells import RawRow, normalize_header
from .content import profile_columns
from .logging_setup import get_logger
from .models import UNRESOLVED, ColumnRoleMap, Role

_logger = get_logger("church_ledger.columns")

# Substring matches need at least this many characters on the contained side
# so that short labels ("dt", "d/c") only ever match exactly.
_MIN_CONTAINED_LEN = 3

_RAW_SYNONYMS: dict[Role, tuple[str, ...]] = {
    Role.DATE: (
        "data",
        "date",
        "dt",
        "fecha",
        "datum",
        "data lançamento",
        "data movimento",
        "data da operação",
        "transaction date",
        "posting date",
        "fecha operación",
    ),
    Role.DESCRIPTION: (
        "descrição",
        "descricao",
        "description",
        "histórico",
        "historico",
        "history",
        "memo",
        "narration",
        "narrativa",
        "detalhes",
        "details",
        "descripción",
        "concepto",
        "observação",
        "particulars",
    ),
    Role.AMOUNT: (
        "valor",
        "amount",
        "value",
        "montante",
        "total",
        "quantia",
        "importe",
        "monto",
        "vlr",
        "betrag",
        "montant",
    ),
    Role.TYPE: (
        "tipo",
        "type",
        "natureza",
        "category",
        "categoria",
        "d/c",
        "c/d",
        "débito/crédito",
        "crédito/débito",
    ),
    Role.DONOR: (
        "doador",
        "donor",
        "nome",
        "name",
        "membro",
        "member",
        "contribuinte",
        "dizimista",
        "ofertante",
        "nombre",
        "donante",
    ),
}

SYNONYMS: dict[Role, tuple[str, ...]] = {
    role: tuple(dict.fromkeys(normalize_header(s) for s in names))
    for role, names in _RAW_SYNONYMS.items()
}

type ResolutionStrategy = Callable[[ColumnRoleMap, Sequence[str], Sequence[RawRow]], ColumnRoleMap]


def _contains(outer: str, inner: str) -> bool:
    return len(inner) >= _MIN_CONTAINED_LEN and inner in outer


def find_header_index(normalized_headers: Sequence[str], synonyms: Sequence[str]) -> int:
    """Return the first header matching ``synonyms`` or ``UNRESOLVED``.

    Exact equality over all headers is tried before substring containment
    (either direction).
    """

    wanted = set(synonyms)
    for idx, header in enumerate(normalized_headers):
        if header and header in wanted:
            return idx
    for idx, header in enumerate(normalized_headers):
        if not header:
            continue
        for syn in synonyms:
            if _contains(header, syn) or _contains(syn, header):
                return idx
    return UNRESOLVED


def match_header_names(
    roles: ColumnRoleMap, headers: Sequence[str], data_rows: Sequence[RawRow]
) -> ColumnRoleMap:
    normalized = [normalize_header(h) for h in headers]
    for role in roles.unresolved():
        idx = find_header_index(normalized, SYNONYMS[role])
        if idx != UNRESOLVED:
            _logger.debug("role %s -> column %d (%r) by header name", role.value, idx, headers[idx])
            roles = roles.with_role(role, idx)
    return roles


def infer_from_content(
    roles: ColumnRoleMap, headers: Sequence[str], data_rows: Sequence[RawRow]
) -> ColumnRoleMap:
    pending = {Role.DATE, Role.AMOUNT, Role.DESCRIPTION} & set(roles.unresolved())
    if not pending or not data_rows:
        return roles

    width = max([len(headers), *(len(r) for r in data_rows)])
    profiles = profile_columns(data_rows, width)

    if Role.DATE in pending:
        for p in profiles:
            if p.is_date_like:
                _logger.debug("role date -> column %d by content", p.index)
                roles = roles.with_role(Role.DATE, p.index)
                break

    if Role.AMOUNT in pending:
        for p in profiles:
            if p.is_numeric_like and not p.is_date_like and p.index != roles.date:
                _logger.debug("role amount -> column %d by content", p.index)
                roles = roles.with_role(Role.AMOUNT, p.index)
                break

    if Role.DESCRIPTION in pending:
        taken = {roles.date, roles.amount}
        candidates = [p for p in profiles if p.is_text_like and p.index not in taken]
        if candidates:
            # Longest average text approximates free-form narration best;
            # max() keeps the leftmost column on ties.
            best = max(candidates, key=lambda p: p.avg_text_length)
            _logger.debug("role description -> column %d by content", best.index)
            roles = roles.with_role(Role.DESCRIPTION, best.index)

    return roles


STRATEGIES: tuple[ResolutionStrategy, ...] = (match_header_names, infer_from_content)


def resolve_columns(
    headers: Sequence[str],
    data_rows: Sequence[RawRow],
    *,
    strategies: Sequence[ResolutionStrategy] = STRATEGIES,
) -> ColumnRoleMap:
    """Resolve every role to a column index, once per table.

    Parameters
    ----------
    headers:
        Header labels as found on the located header row.
    data_rows:
        Rows below the header; only the leading rows are sampled.
    strategies:
        Ordered resolution strategies; resolution stops early once every
        role is resolved.
    """

    roles = ColumnRoleMap()
    for strategy in strategies:
        if not roles.unresolved():
            break
        roles = strategy(roles, headers, data_rows)
    _logger.debug("resolved columns: %s", roles.as_dict())
    return roles


__all__ = [
    "STRATEGIES",
    "SYNONYMS",
    "ResolutionStrategy",
    "find_header_index",
    "infer_from_content",
    "match_header_names",
    "resolve_columns",
]
