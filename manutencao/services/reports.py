"""
Filters and aggregates over the cached maintenance history.
Shared by the dashboard, history listing, diagnostics search and reports.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from manutencao.core.coercion import coerce_number
from manutencao.schemas.maintenance import (
    Company,
    Equipment,
    MaintenanceRecord,
    MaintenanceType,
    RecordStatus,
    Sector,
    Technician,
)
from manutencao.services.normalizer import sort_history

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10


class Visualization(str, Enum):
    TODAS = "TODAS"
    PREVENTIVAS = "PREVENTIVAS"
    CORRETIVAS = "CORRETIVAS"


_VISUALIZATION_MARKERS = {
    Visualization.PREVENTIVAS: "PREVENTIVA",
    Visualization.CORRETIVAS: "CORRETIVA",
}


def _same_id(record_id: Any, filter_id: Optional[str]) -> bool:
    if not filter_id:
        return True
    return str(record_id or "").strip() == str(filter_id).strip()


class ReferenceLookup:
    """Resolve foreign keys of a record for display.

    References are weak: a missing row never raises, it degrades to the raw
    id or a placeholder.
    """

    def __init__(
        self,
        equipments: Sequence[Equipment] = (),
        technicians: Sequence[Technician] = (),
        sectors: Sequence[Sector] = (),
        companies: Sequence[Company] = (),
        maintenance_types: Sequence[MaintenanceType] = (),
    ) -> None:
        self._equipments = {str(e.id).strip(): e for e in equipments}
        self._technicians = {str(t.id).strip(): t for t in technicians}
        self._sectors = {str(s.id).strip(): s for s in sectors}
        self._companies = {str(c.id).strip(): c for c in companies}
        self._types = {str(t.id).strip(): t for t in maintenance_types}

    @classmethod
    def from_store(cls, store: Any) -> "ReferenceLookup":
        return cls(
            equipments=store.equipments,
            technicians=store.technicians,
            sectors=store.sectors,
            companies=store.companies,
            maintenance_types=store.maintenance_types,
        )

    def equipment(self, equipment_id: Any) -> Optional[Equipment]:
        return self._equipments.get(str(equipment_id or "").strip())

    def maintenance_type(self, type_id: Any) -> Optional[MaintenanceType]:
        return self._types.get(str(type_id or "").strip())

    def equipment_name(self, equipment_id: str, default: Optional[str] = None) -> str:
        equipment = self.equipment(equipment_id)
        if equipment:
            return equipment.descricao
        return equipment_id if default is None else default

    def equipment_code(self, equipment_id: str) -> str:
        equipment = self.equipment(equipment_id)
        return equipment.codigo if equipment else "???"

    def equipment_label(self, equipment_id: str) -> str:
        equipment = self.equipment(equipment_id)
        if equipment:
            return f"{equipment.codigo} - {equipment.descricao}"
        return "EQUIPAMENTO NÃO ENCONTRADO"

    def technician_name(self, technician_id: str) -> str:
        technician = self._technicians.get(str(technician_id or "").strip())
        return technician.nome if technician else technician_id

    def sector_name(self, sector_id: str, default: Optional[str] = None) -> str:
        sector = self._sectors.get(str(sector_id or "").strip())
        if sector:
            return sector.nome
        return sector_id if default is None else default

    def company_name(self, company_id: str) -> str:
        company = self._companies.get(str(company_id or "").strip())
        return company.nome if company else company_id

    def type_label(self, type_id: str) -> str:
        maintenance_type = self.maintenance_type(type_id)
        return maintenance_type.tipo if maintenance_type else type_id


@dataclass
class RecordFilters:
    """Criteria shared by the dashboard, history and report screens.

    Empty values disable the corresponding criterion.
    """
    visualization: Visualization = Visualization.TODAS
    equipamento_id: Optional[str] = None
    mecanico_id: Optional[str] = None
    setor_id: Optional[str] = None
    tipo_manutencao_id: Optional[str] = None
    causa: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    search: Optional[str] = None

    def matches(self, record: MaintenanceRecord, lookup: ReferenceLookup) -> bool:
        marker = _VISUALIZATION_MARKERS.get(self.visualization)
        if marker:
            maintenance_type = lookup.maintenance_type(record.tipo_manutencao_id)
            if not maintenance_type or marker not in maintenance_type.tipo.upper():
                return False

        if self.start_date and record.data_inicial < self.start_date:
            return False
        if self.end_date and record.data_inicial > self.end_date:
            return False

        if not _same_id(record.equipamento_id, self.equipamento_id):
            return False
        if not _same_id(record.mecanico_id, self.mecanico_id):
            return False
        if not _same_id(record.setor_id, self.setor_id):
            return False
        if not _same_id(record.tipo_manutencao_id, self.tipo_manutencao_id):
            return False
        if self.causa and record.causa_diagnostico != self.causa:
            return False

        if self.search:
            term = self.search.lower()
            haystacks = (record.defeito_falha, record.solucao_procedimentos, record.documentacao_os)
            if not any(term in (text or "").lower() for text in haystacks):
                return False

        return True


def filter_records(
    records: Iterable[MaintenanceRecord],
    filters: RecordFilters,
    lookup: ReferenceLookup,
) -> List[MaintenanceRecord]:
    return [r for r in records if filters.matches(r, lookup)]


def generate_report(
    records: Iterable[MaintenanceRecord],
    filters: RecordFilters,
    lookup: ReferenceLookup,
) -> List[MaintenanceRecord]:
    """Filtered records, newest first."""
    return sort_history(filter_records(records, filters, lookup))


def dashboard_stats(records: Sequence[MaintenanceRecord]) -> Dict[str, Any]:
    completed = sum(1 for r in records if r.status == RecordStatus.COMPLETED)
    pending = len(records) - completed
    total_cost = sum(coerce_number(r.valor) for r in records)
    return {
        "total": len(records),
        "completed": completed,
        "pending": pending,
        "total_cost": total_cost,
        "chart": [
            {"name": "CONCLUÍDOS", "value": completed, "color": "#22c55e"},
            {"name": "ABERTOS", "value": pending, "color": "#f59e0b"},
        ],
        "recent": list(records[:RECENT_LIMIT]),
    }


def search_diagnostics(
    records: Iterable[MaintenanceRecord],
    term: Optional[str] = None,
    equipamento_id: Optional[str] = None,
    setor_id: Optional[str] = None,
) -> List[MaintenanceRecord]:
    """Find past interventions by symptom text, equipment or sector.

    At least one criterion is required; with none the result is empty.
    """
    text = (term or "").strip().lower()
    if not text and not equipamento_id and not setor_id:
        return []

    def matches_text(record: MaintenanceRecord) -> bool:
        if not text:
            return True
        fields = (
            record.causa_diagnostico,
            record.defeito_falha,
            record.solucao_procedimentos,
            record.pecas_utilizadas,
        )
        return any(text in (value or "").lower() for value in fields)

    found = [
        r for r in records
        if matches_text(r)
        and _same_id(r.equipamento_id, equipamento_id)
        and _same_id(r.setor_id, setor_id)
    ]
    logger.info(f"Diagnostics search found {len(found)} records")
    return sort_history(found)


def unique_causes(records: Iterable[MaintenanceRecord]) -> List[str]:
    return sorted({r.causa_diagnostico for r in records if r.causa_diagnostico})
