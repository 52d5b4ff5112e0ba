from __future__ import annotations
import logging
from typing import Any, Dict, List, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from manutencao.core.coercion import coerce_number, parse_sort_date, truncate_date
from manutencao.schemas.maintenance import MaintenanceRecord, SheetRow

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=SheetRow)

_TEXT_FIELDS = (
    "id",
    "equipamentoId",
    "horaChegada",
    "empresaId",
    "tipoManutencaoId",
    "setorId",
    "documentacaoOS",
    "mecanicoId",
    "defeitoFalha",
    "causaDiagnostico",
    "dicasManutencao",
    "pecasUtilizadas",
    "solucaoProcedimentos",
    "outrosProblemas",
)


def _text(value: Any) -> str:
    if value is None or value == "":
        return ""
    return str(value)


def normalize_record(raw: Dict[str, Any]) -> MaintenanceRecord:
    """Build a MaintenanceRecord from a raw Lancamentos row.

    Missing text cells become "", missing numbers become 0 and a missing end
    date becomes None. Timestamps are cut down to their date part. Any
    ``status`` carried by the row is ignored.
    """

    data: Dict[str, Any] = {name: _text(raw.get(name)) for name in _TEXT_FIELDS}
    data["horimetroKm"] = coerce_number(raw.get("horimetroKm"))
    data["valor"] = coerce_number(raw.get("valor"))
    data["dataInicial"] = truncate_date(raw.get("dataInicial"))
    data["dataFinal"] = truncate_date(raw.get("dataFinal")) or None
    return MaintenanceRecord.model_validate(data)


def sort_history(records: List[MaintenanceRecord]) -> List[MaintenanceRecord]:
    """Newest start date first; unparseable dates sort as the epoch."""
    return sorted(records, key=lambda r: parse_sort_date(r.data_inicial), reverse=True)


def normalize_history(raw_rows: Any) -> List[MaintenanceRecord]:
    """Normalize and order the rows returned for the Lancamentos tab."""
    if not isinstance(raw_rows, list):
        logger.warning("History data is not a list, returning empty history")
        return []

    records = []
    for row in raw_rows:
        if not isinstance(row, dict):
            logger.warning(f"Skipping malformed history row: {row!r}")
            continue
        records.append(normalize_record(row))
    return sort_history(records)


def parse_rows(model: Type[RowT], raw_rows: Any) -> List[RowT]:
    """Parse the rows of a reference tab, tolerating odd payload shapes."""
    if not isinstance(raw_rows, list):
        logger.warning(f"{model.__name__} data is not a list, returning empty table")
        return []
    rows: List[RowT] = []
    for row in raw_rows:
        if not isinstance(row, dict):
            continue
        try:
            rows.append(model.model_validate(row))
        except PydanticValidationError as exc:
            logger.warning(f"Skipping invalid {model.__name__} row {row.get('id')!r}: {exc}")
    return rows
