"""
Display formatting and CSV layouts for maintenance records.
"""

from __future__ import annotations
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional

from manutencao.schemas.maintenance import MaintenanceRecord, RecordStatus
from manutencao.services.reports import ReferenceLookup

REPORT_HEADERS = [
    "ID", "EQUIPAMENTO", "HORIMETRO/KM", "HORA CHEGADA", "DATA INICIAL",
    "DATA FINAL", "EMPRESA", "TIPO MANUTENCAO", "SETOR", "OS",
    "MECANICO", "DEFEITO/FALHA", "CAUSA/DIAGNOSTICO", "DICAS",
    "PECAS UTILIZADAS", "SOLUCAO", "OUTROS PROBLEMAS", "VALOR",
]

HISTORY_HEADERS = [
    "ID", "DATA", "OS", "COD_EQUIP", "EQUIPAMENTO", "MECANICO",
    "DEFEITO", "SOLUCAO", "VALOR", "STATUS",
]

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def format_date(value: Optional[str]) -> str:
    """YYYY-MM-DD -> DD/MM/YYYY; empty -> '-'; anything else untouched."""
    if not value:
        return "-"
    parts = value.split("-")
    if len(parts) == 3:
        return f"{parts[2]}/{parts[1]}/{parts[0]}"
    return value


def format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_currency(value: float) -> str:
    """Brazilian real display, e.g. 1500 -> 'R$ 1.500,00'."""
    formatted = f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {formatted}"


def csv_text(value: Optional[str]) -> str:
    """Quoted, upper-cased CSV text cell with embedded quotes doubled."""
    cleaned = (value or "").replace('"', '""').upper()
    return f'"{cleaned}"'


def export_filename(prefix: str, today: Optional[date] = None) -> str:
    today = today or datetime.now().date()
    return f"{prefix}_{today.isoformat()}.csv"


def report_csv(records: Iterable[MaintenanceRecord], lookup: ReferenceLookup) -> str:
    """Full report layout (one column per record field)."""
    rows = [",".join(REPORT_HEADERS)]
    for r in records:
        values = [
            r.id,
            csv_text(lookup.equipment_name(r.equipamento_id)),
            format_number(r.horimetro_km),
            csv_text(r.hora_chegada),
            format_date(r.data_inicial),
            format_date(r.data_final),
            csv_text(r.empresa_id),
            csv_text(lookup.type_label(r.tipo_manutencao_id)),
            csv_text(lookup.sector_name(r.setor_id)),
            csv_text(r.documentacao_os),
            csv_text(lookup.technician_name(r.mecanico_id)),
            csv_text(r.defeito_falha),
            csv_text(r.causa_diagnostico),
            csv_text(r.dicas_manutencao),
            csv_text(r.pecas_utilizadas),
            csv_text(r.solucao_procedimentos),
            csv_text(r.outros_problemas),
            format_number(r.valor),
        ]
        rows.append(",".join(values))
    return "\n".join(rows)


def history_csv(records: Iterable[MaintenanceRecord], lookup: ReferenceLookup) -> str:
    """Condensed layout used by the history screen export."""
    rows = [",".join(HISTORY_HEADERS)]
    for r in records:
        values = [
            r.id,
            format_date(r.data_inicial),
            csv_text(r.documentacao_os),
            csv_text(lookup.equipment_code(r.equipamento_id)),
            csv_text(lookup.equipment_name(r.equipamento_id, default="N/A")),
            csv_text(lookup.technician_name(r.mecanico_id)),
            csv_text(r.defeito_falha),
            csv_text(r.solucao_procedimentos),
            format_number(r.valor),
            "CONCLUIDO" if r.status == RecordStatus.COMPLETED else "PENDENTE",
        ]
        rows.append(",".join(values))
    return "\n".join(rows)


def print_sheet_context(
    record: MaintenanceRecord,
    lookup: ReferenceLookup,
    issued_on: Optional[date] = None,
) -> Dict[str, Any]:
    """Values shown on the printable service order sheet."""
    issued_on = issued_on or datetime.now().date()
    completed = record.status == RecordStatus.COMPLETED
    return {
        "os_number": record.documentacao_os or "S/N",
        "title_os": record.documentacao_os,
        "issued_on": issued_on.strftime("%d/%m/%Y"),
        "status_label": "CONCLUÍDO" if completed else "ABERTO",
        "equipment_code": lookup.equipment_code(record.equipamento_id),
        "equipment_name": lookup.equipment_name(record.equipamento_id, default="N/A"),
        "technician_name": lookup.technician_name(record.mecanico_id),
        "company_name": lookup.company_name(record.empresa_id) or "-",
        "horimetro_km": format_number(record.horimetro_km),
        "start_date": format_date(record.data_inicial),
        "end_date": format_date(record.data_final),
        "defect": record.defeito_falha,
        "diagnosis": record.causa_diagnostico or "-",
        "solution": record.solucao_procedimentos,
        "parts": record.pecas_utilizadas or "-",
        "cost": format_currency(record.valor),
        "notes": record.outros_problemas or "-",
    }

