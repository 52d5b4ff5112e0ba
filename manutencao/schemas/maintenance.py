"""
Pydantic models for the spreadsheet entities and the API payloads.
Field names are snake_case in Python and camelCase on the wire, matching
the column headers of the spreadsheet tabs.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from manutencao.core.coercion import coerce_number


class RecordStatus(str, Enum):
    """Derived state of a maintenance record."""
    PENDING = "Pendente"
    COMPLETED = "Concluído"


def derive_status(data_final: Optional[str]) -> RecordStatus:
    """A record is completed once it carries a non-empty end date."""
    if isinstance(data_final, str) and data_final.strip():
        return RecordStatus.COMPLETED
    return RecordStatus.PENDING


class SheetRow(BaseModel):
    """Base for rows read from a spreadsheet tab."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="allow",
    )

    id: str = ""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # Empty spreadsheet cells arrive as null; let field defaults apply
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Equipment(SheetRow):
    codigo: str = ""
    descricao: str = ""
    tipo: str = ""
    marca: str = ""
    modelo: str = ""
    ano: str = ""


class Technician(SheetRow):
    codigo: str = ""
    nome: str = ""
    empresa_id: str = ""


class Sector(SheetRow):
    codigo: str = ""
    nome: str = ""


class Company(SheetRow):
    codigo: str = ""
    nome: str = ""
    cpf_cnpj: str = ""
    cidade: str = ""
    contato: str = ""


class MaintenanceType(SheetRow):
    codigo: str = ""
    tipo: str = ""


class Defect(SheetRow):
    codigo: str = ""
    descricao: str = ""


class MaintenanceRecord(SheetRow):
    """A single maintenance intervention (one row of the Lancamentos tab)."""

    model_config = ConfigDict(extra="ignore")

    equipamento_id: str = ""
    horimetro_km: float = 0
    hora_chegada: str = ""
    data_inicial: str = ""
    data_final: Optional[str] = None
    empresa_id: str = ""
    tipo_manutencao_id: str = ""
    setor_id: str = ""
    documentacao_os: str = Field(default="", alias="documentacaoOS")
    mecanico_id: str = ""
    defeito_falha: str = ""
    causa_diagnostico: str = ""
    dicas_manutencao: str = ""
    pecas_utilizadas: str = ""
    solucao_procedimentos: str = ""
    outros_problemas: str = ""
    valor: float = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> RecordStatus:
        return derive_status(self.data_final)

    def to_sheet_row(self) -> Dict[str, Any]:
        """Serialize for the web app; the derived status is never persisted."""
        return self.model_dump(by_alias=True, exclude={"status"})


class MaintenanceRecordPayload(MaintenanceRecord):
    """Incoming record from the entry form."""

    horimetro_km: float = Field(default=0, ge=0)
    valor: float = Field(default=0, ge=0)
    data_inicial: str = Field(..., min_length=1, description="Data inicial (YYYY-MM-DD)", examples=["2023-11-15"])
    equipamento_id: str = Field(..., min_length=1, description="ID do equipamento", examples=["1"])

    @field_validator("horimetro_km", "valor", mode="before")
    @classmethod
    def _coerce_numbers(cls, value: Any) -> float:
        return coerce_number(value)

    @field_validator("data_final", mode="before")
    @classmethod
    def _empty_end_date(cls, value: Any) -> Optional[str]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value


class ReferenceItemPayload(BaseModel):
    """Free-form row for one of the reference tabs."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: Optional[str] = None

    def to_sheet_row(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class MutationResponse(BaseModel):
    status: str = "success"
    id: Optional[str] = None
    message: Optional[str] = None


class DataSnapshot(BaseModel):
    equipments: List[Equipment]
    technicians: List[Technician]
    sectors: List[Sector]
    companies: List[Company]
    maintenance_types: List[MaintenanceType]
    defects: List[Defect]
    history: List[MaintenanceRecord]
    loading: bool


class ChartPoint(BaseModel):
    name: str
    value: int
    color: str


class DashboardResponse(BaseModel):
    total: int
    completed: int
    pending: int
    total_cost: float
    total_cost_display: str
    chart: List[ChartPoint]
    recent: List[MaintenanceRecord]


class ReportResponse(BaseModel):
    total: int
    records: List[MaintenanceRecord]


class DefectAnalysisRequest(BaseModel):
    equipamento_id: str = Field(..., min_length=1)
    defeito: str = Field(..., min_length=1, description="Problema relatado")


class DiagnosisRequest(BaseModel):
    equipamento_id: str = Field(..., min_length=1)
    defeito: str = Field(..., min_length=1)
    diagnostico: str = Field(..., min_length=1, description="Diagnóstico inicial do mecânico")


class HistorySummaryRequest(BaseModel):
    equipamento_id: str = Field(..., min_length=1)
    search: Optional[str] = None
    mecanico_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class AITextResponse(BaseModel):
    text: str


class DiagnosticHit(BaseModel):
    record: MaintenanceRecord
    equipment_label: str
    sector_name: str


class DiagnosticsResponse(BaseModel):
    total: int
    results: List[DiagnosticHit]
