"""Tests for the generic create/update/delete facade."""

import uuid

import pytest
from unittest.mock import AsyncMock

from manutencao.core.exceptions import ValidationError
from manutencao.core.fallback_data import TabName
from manutencao.integrations.sheets import SheetAction, SheetsGateway
from manutencao.services.crud import CrudFacade, TableKey, resolve_table_key


@pytest.fixture
def spy_gateway(offline_gateway: SheetsGateway) -> SheetsGateway:
    offline_gateway.mutate = AsyncMock(wraps=offline_gateway.mutate)
    return offline_gateway


@pytest.mark.unit
class TestCrudFacade:

    async def test_create_generates_id(self, spy_gateway: SheetsGateway):
        crud = CrudFacade(spy_gateway)
        row = await crud.create("technicians", {"nome": "X", "codigo": "T1"})

        assert row["nome"] == "X"
        assert row["codigo"] == "T1"
        uuid.UUID(row["id"])
        spy_gateway.mutate.assert_awaited_once_with(SheetAction.CREATE, TabName.TECNICOS, data=row)

    async def test_create_keeps_given_id(self, spy_gateway: SheetsGateway):
        row = await CrudFacade(spy_gateway).create(TableKey.SECTORS, {"id": "77", "nome": "PÁTIO"})
        assert row["id"] == "77"

    async def test_create_does_not_mutate_input(self, spy_gateway: SheetsGateway):
        item = {"nome": "EMPRESA Y"}
        await CrudFacade(spy_gateway).create("companies", item)
        assert "id" not in item

    async def test_update_requires_id(self, spy_gateway: SheetsGateway):
        with pytest.raises(ValidationError):
            await CrudFacade(spy_gateway).update("equipment", {"descricao": "SEM ID"})
        spy_gateway.mutate.assert_not_awaited()

    async def test_update_dispatches_to_tab(self, spy_gateway: SheetsGateway):
        await CrudFacade(spy_gateway).update("types", {"id": "1", "tipo": "PREVENTIVA"})
        spy_gateway.mutate.assert_awaited_once_with(
            SheetAction.UPDATE, TabName.TIPOS, data={"id": "1", "tipo": "PREVENTIVA"}
        )

    async def test_delete_sends_id(self, spy_gateway: SheetsGateway):
        await CrudFacade(spy_gateway).delete(TableKey.HISTORY, "101")
        spy_gateway.mutate.assert_awaited_once_with(SheetAction.DELETE, TabName.LANCAMENTOS, record_id="101")

    async def test_delete_requires_id(self, spy_gateway: SheetsGateway):
        with pytest.raises(ValidationError):
            await CrudFacade(spy_gateway).delete(TableKey.HISTORY, "")

    async def test_unknown_table_is_rejected(self, spy_gateway: SheetsGateway):
        with pytest.raises(ValidationError) as exc_info:
            await CrudFacade(spy_gateway).create("db_inventory", {"nome": "X"})
        assert "allowed" in exc_info.value.details
        spy_gateway.mutate.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.parametrize("key, expected", [
    ("companies", TableKey.COMPANIES),
    ("db_companies", TableKey.COMPANIES),
    ("db_technicians", TableKey.TECHNICIANS),
    ("db_sectors", TableKey.SECTORS),
    ("db_types", TableKey.TYPES),
    ("db_equipment", TableKey.EQUIPMENT),
    ("history", TableKey.HISTORY),
])
def test_resolve_table_key(key, expected):
    assert resolve_table_key(key) == expected
