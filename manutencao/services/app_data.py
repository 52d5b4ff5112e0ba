"""
In-memory copy of every spreadsheet tab.
Tables are fetched concurrently and replaced wholesale on each refresh;
nothing is patched locally after a write.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from manutencao.core.fallback_data import TabName
from manutencao.integrations.sheets import SheetsGateway
from manutencao.schemas.maintenance import (
    Company,
    Defect,
    Equipment,
    MaintenanceRecord,
    MaintenanceType,
    Sector,
    Technician,
)
from manutencao.services.crud import CrudFacade, TableKey
from manutencao.services.normalizer import normalize_history, parse_rows

logger = logging.getLogger(__name__)


class AppDataStore:
    """Snapshot of all tables plus the reload helpers used after edits."""

    def __init__(self, gateway: SheetsGateway, crud: Optional[CrudFacade] = None) -> None:
        self.gateway = gateway
        self.crud = crud or CrudFacade(gateway)

        self.equipments: List[Equipment] = []
        self.technicians: List[Technician] = []
        self.sectors: List[Sector] = []
        self.companies: List[Company] = []
        self.maintenance_types: List[MaintenanceType] = []
        self.defects: List[Defect] = []
        self.history: List[MaintenanceRecord] = []
        self.loading = True

        self._loaders: Dict[TabName, Callable[[Any], None]] = {
            TabName.EQUIPAMENTOS: self._set_equipments,
            TabName.TECNICOS: self._set_technicians,
            TabName.SETORES: self._set_sectors,
            TabName.EMPRESAS: self._set_companies,
            TabName.TIPOS: self._set_maintenance_types,
            TabName.DEFEITOS: self._set_defects,
            TabName.LANCAMENTOS: self._set_history,
        }

    async def load_all(self) -> None:
        """Fetch the seven tabs concurrently and store what arrived."""
        try:
            await self._fetch(list(self._loaders))
        finally:
            self.loading = False

    async def refresh_reference_data(self) -> None:
        """Re-fetch the five reference tabs (not history)."""
        await self._fetch([
            TabName.EQUIPAMENTOS,
            TabName.TECNICOS,
            TabName.SETORES,
            TabName.EMPRESAS,
            TabName.TIPOS,
        ])

    async def refresh_history(self) -> None:
        await self._fetch([TabName.LANCAMENTOS])

    async def save_record(self, record: MaintenanceRecord) -> Dict[str, Any]:
        row = await self.crud.create(TableKey.HISTORY, record.to_sheet_row())
        await self.refresh_history()
        return row

    async def update_record(self, record: MaintenanceRecord) -> Dict[str, Any]:
        row = await self.crud.update(TableKey.HISTORY, record.to_sheet_row())
        await self.refresh_history()
        return row

    async def delete_record(self, record_id: str) -> None:
        await self.crud.delete(TableKey.HISTORY, record_id)
        await self.refresh_history()

    async def create_reference(self, key: TableKey, item: Dict[str, Any]) -> Dict[str, Any]:
        row = await self.crud.create(key, item)
        await self.refresh_reference_data()
        return row

    async def update_reference(self, key: TableKey, item: Dict[str, Any]) -> Dict[str, Any]:
        row = await self.crud.update(key, item)
        await self.refresh_reference_data()
        return row

    async def delete_reference(self, key: TableKey, record_id: str) -> None:
        await self.crud.delete(key, record_id)
        await self.refresh_reference_data()

    def get_record(self, record_id: str) -> Optional[MaintenanceRecord]:
        return next((r for r in self.history if r.id == record_id), None)

    def reference_rows(self, key: TableKey) -> List[Any]:
        return {
            TableKey.EQUIPMENT: self.equipments,
            TableKey.TECHNICIANS: self.technicians,
            TableKey.SECTORS: self.sectors,
            TableKey.COMPANIES: self.companies,
            TableKey.TYPES: self.maintenance_types,
            TableKey.HISTORY: self.history,
        }[key]

    def snapshot(self) -> Dict[str, Any]:
        return {
            "equipments": self.equipments,
            "technicians": self.technicians,
            "sectors": self.sectors,
            "companies": self.companies,
            "maintenance_types": self.maintenance_types,
            "defects": self.defects,
            "history": self.history,
            "loading": self.loading,
        }

    async def _fetch(self, tabs: List[TabName]) -> None:
        results = await asyncio.gather(
            *[self.gateway.fetch_table(tab) for tab in tabs],
            return_exceptions=True,
        )
        for tab, result in zip(tabs, results):
            if isinstance(result, BaseException):
                logger.error(f"Failed to load {tab.value}: {result}")
                continue
            self._loaders[tab](result)

    def _set_equipments(self, raw: Any) -> None:
        self.equipments = parse_rows(Equipment, raw)

    def _set_technicians(self, raw: Any) -> None:
        self.technicians = parse_rows(Technician, raw)

    def _set_sectors(self, raw: Any) -> None:
        self.sectors = parse_rows(Sector, raw)

    def _set_companies(self, raw: Any) -> None:
        self.companies = parse_rows(Company, raw)

    def _set_maintenance_types(self, raw: Any) -> None:
        self.maintenance_types = parse_rows(MaintenanceType, raw)

    def _set_defects(self, raw: Any) -> None:
        self.defects = parse_rows(Defect, raw)

    def _set_history(self, raw: Any) -> None:
        self.history = normalize_history(raw)
