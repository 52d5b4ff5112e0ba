from __future__ import annotations
import logging
import uuid
from enum import Enum
from typing import Any, Dict, Union

from manutencao.core.exceptions import ValidationError
from manutencao.core.fallback_data import TabName
from manutencao.integrations.sheets import SheetAction, SheetsGateway

logger = logging.getLogger(__name__)


class TableKey(str, Enum):
    """Logical tables that can be edited through the API."""
    COMPANIES = "companies"
    TECHNICIANS = "technicians"
    SECTORS = "sectors"
    TYPES = "types"
    EQUIPMENT = "equipment"
    HISTORY = "history"


TABLE_TABS: Dict[TableKey, TabName] = {
    TableKey.COMPANIES: TabName.EMPRESAS,
    TableKey.TECHNICIANS: TabName.TECNICOS,
    TableKey.SECTORS: TabName.SETORES,
    TableKey.TYPES: TabName.TIPOS,
    TableKey.EQUIPMENT: TabName.EQUIPAMENTOS,
    TableKey.HISTORY: TabName.LANCAMENTOS,
}

# Keys used by the cadastro screens of earlier releases
LEGACY_KEYS: Dict[str, TableKey] = {
    "db_companies": TableKey.COMPANIES,
    "db_technicians": TableKey.TECHNICIANS,
    "db_sectors": TableKey.SECTORS,
    "db_types": TableKey.TYPES,
    "db_equipment": TableKey.EQUIPMENT,
}

REFERENCE_KEYS = frozenset(TABLE_TABS) - {TableKey.HISTORY}


def resolve_table_key(key: Union[str, TableKey]) -> TableKey:
    """Map a caller supplied key to a TableKey.

    Raises:
        ValidationError: If the key names no known table
    """
    if isinstance(key, TableKey):
        return key
    if key in LEGACY_KEYS:
        return LEGACY_KEYS[key]
    try:
        return TableKey(key)
    except ValueError:
        raise ValidationError(
            f"Unknown table: {key}",
            {"table": key, "allowed": [k.value for k in TableKey]},
        )


def new_record_id() -> str:
    return str(uuid.uuid4())


class CrudFacade:
    """Create/update/delete rows of any editable tab.

    The facade only dispatches; reloading the cached tables afterwards is the
    caller's job.
    """

    def __init__(self, gateway: SheetsGateway) -> None:
        self.gateway = gateway

    async def create(self, key: Union[str, TableKey], item: Dict[str, Any]) -> Dict[str, Any]:
        """Create a row, generating its id when the payload has none.

        Returns:
            The row as dispatched, including its id
        """
        tab = TABLE_TABS[resolve_table_key(key)]
        row = dict(item)
        if not row.get("id"):
            row["id"] = new_record_id()
        await self.gateway.mutate(SheetAction.CREATE, tab, data=row)
        logger.info(f"Created row {row['id']} in {tab.value}")
        return row

    async def update(self, key: Union[str, TableKey], item: Dict[str, Any]) -> Dict[str, Any]:
        tab = TABLE_TABS[resolve_table_key(key)]
        if not item.get("id"):
            raise ValidationError("Cannot update a row without id", {"table": tab.value})
        row = dict(item)
        await self.gateway.mutate(SheetAction.UPDATE, tab, data=row)
        logger.info(f"Updated row {row['id']} in {tab.value}")
        return row

    async def delete(self, key: Union[str, TableKey], record_id: str) -> None:
        tab = TABLE_TABS[resolve_table_key(key)]
        if not record_id:
            raise ValidationError("Cannot delete a row without id", {"table": tab.value})
        await self.gateway.mutate(SheetAction.DELETE, tab, record_id=record_id)
        logger.info(f"Deleted row {record_id} from {tab.value}")
