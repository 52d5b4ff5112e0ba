"""
Tests for the spreadsheet gateway: offline dataset, HTTP envelope handling
and the total fallback on failures.
"""

import asyncio
import logging

import aiohttp
import pytest
from unittest.mock import AsyncMock, patch

from manutencao.core.fallback_data import (
    FALLBACK_BY_TAB,
    MOCK_EQUIPMENT,
    MOCK_MAINTENANCE_TYPES,
    OFFLINE_WRITE_RESULT,
    TabName,
)
from manutencao.integrations.sheets import SheetAction, SheetsGateway

LIVE_URL = "https://script.google.com/macros/s/abc123/exec"


@pytest.mark.unit
class TestOfflineMode:
    """Gateway without a configured URL."""

    def test_placeholder_url_is_not_configured(self):
        assert not SheetsGateway().is_configured
        assert not SheetsGateway(base_url="").is_configured
        assert SheetsGateway(base_url=LIVE_URL).is_configured

    @pytest.mark.parametrize("tab", list(TabName))
    async def test_every_tab_has_demo_rows(self, offline_gateway: SheetsGateway, tab: TabName):
        rows = await offline_gateway.fetch_table(tab)
        assert isinstance(rows, list)
        assert rows

    async def test_equipment_tab_returns_five_items(self, offline_gateway: SheetsGateway):
        rows = await offline_gateway.fetch_table(TabName.EQUIPAMENTOS)
        assert len(rows) == 5
        assert rows[0]["codigo"] == "EQ-001"

    async def test_reads_are_independent_copies(self, offline_gateway: SheetsGateway):
        first = await offline_gateway.fetch_table(TabName.EQUIPAMENTOS)
        first[0]["descricao"] = "ALTERADO"
        second = await offline_gateway.fetch_table(TabName.EQUIPAMENTOS)
        assert second == MOCK_EQUIPMENT
        assert MOCK_EQUIPMENT[0]["descricao"] != "ALTERADO"

    @pytest.mark.parametrize("action", list(SheetAction))
    async def test_writes_are_simulated(self, offline_gateway: SheetsGateway, action: SheetAction):
        result = await offline_gateway.mutate(action, TabName.TECNICOS, data={"id": "9"}, record_id="9")
        assert result == OFFLINE_WRITE_RESULT
        assert result["message"] == "Operação simulada com sucesso (Modo Offline)"

    async def test_demo_reads_do_not_warn(self, offline_gateway: SheetsGateway, caplog):
        with caplog.at_level(logging.DEBUG, logger="manutencao.integrations.sheets"):
            await offline_gateway.fetch_table(TabName.SETORES)
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    async def test_unknown_tab_returns_empty_list(self, offline_gateway: SheetsGateway):
        assert await offline_gateway.request("GET", {"tab": "Inexistente"}) == []


@pytest.mark.unit
class TestLiveMode:
    """Gateway with a URL, HTTP calls mocked at the aiohttp level."""

    async def test_data_member_is_unwrapped(self, json_response):
        gateway = SheetsGateway(base_url=LIVE_URL)
        rows = [{"id": "1", "nome": "SETOR X"}]
        with patch("manutencao.integrations.sheets.aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = json_response({"status": "success", "data": rows})
            result = await gateway.fetch_table(TabName.SETORES)

        assert result == rows
        _, kwargs = mock_get.call_args
        assert kwargs["params"] == {"tab": "Setores"}

    async def test_plain_list_body_is_returned_as_is(self, json_response):
        gateway = SheetsGateway(base_url=LIVE_URL)
        rows = [{"id": "1"}]
        with patch("manutencao.integrations.sheets.aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = json_response(rows)
            assert await gateway.fetch_table(TabName.EMPRESAS) == rows

    async def test_error_envelope_falls_back(self, json_response):
        gateway = SheetsGateway(base_url=LIVE_URL)
        with patch("manutencao.integrations.sheets.aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = json_response(
                {"status": "error", "message": "Aba não encontrada"}
            )
            result = await gateway.fetch_table(TabName.EQUIPAMENTOS)
        assert result == MOCK_EQUIPMENT

    async def test_http_error_falls_back(self, json_response):
        gateway = SheetsGateway(base_url=LIVE_URL)
        with patch("manutencao.integrations.sheets.aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = json_response({}, status=500)
            result = await gateway.fetch_table(TabName.EQUIPAMENTOS)
        assert len(result) == 5

    async def test_timeout_falls_back(self):
        gateway = SheetsGateway(base_url=LIVE_URL)
        with patch("manutencao.integrations.sheets.aiohttp.ClientSession.get") as mock_get:
            mock_get.side_effect = asyncio.TimeoutError()
            result = await gateway.fetch_table(TabName.EQUIPAMENTOS)
        assert result == MOCK_EQUIPMENT

    async def test_failed_write_is_simulated(self):
        gateway = SheetsGateway(base_url=LIVE_URL)
        with patch("manutencao.integrations.sheets.aiohttp.ClientSession.post") as mock_post:
            mock_post.side_effect = OSError("connection refused")
            result = await gateway.mutate(SheetAction.DELETE, TabName.LANCAMENTOS, record_id="101")
        assert result == OFFLINE_WRITE_RESULT

    async def test_write_posts_action_envelope(self, json_response):
        gateway = SheetsGateway(base_url=LIVE_URL)
        with patch("manutencao.integrations.sheets.aiohttp.ClientSession.post") as mock_post:
            mock_post.return_value.__aenter__.return_value = json_response({"status": "success"})
            result = await gateway.mutate(SheetAction.CREATE, TabName.SETORES, data={"id": "7", "nome": "NOVO"})

        assert result == {"status": "success"}
        _, kwargs = mock_post.call_args
        assert kwargs["json"] == {"action": "create", "tab": "Setores", "data": {"id": "7", "nome": "NOVO"}}

    @pytest.mark.parametrize("tab", list(TabName))
    async def test_unreachable_endpoint_falls_back_for_every_tab(self, tab: TabName):
        gateway = SheetsGateway(base_url=LIVE_URL)
        with patch("manutencao.integrations.sheets.aiohttp.ClientSession.get") as mock_get:
            mock_get.side_effect = aiohttp.ClientConnectionError("unreachable")
            result = await gateway.fetch_table(tab)
        assert result == FALLBACK_BY_TAB[tab]

    async def test_malformed_json_falls_back(self, json_response):
        gateway = SheetsGateway(base_url=LIVE_URL)
        response = json_response(None)
        response.json = AsyncMock(side_effect=ValueError("Expecting value"))
        with patch("manutencao.integrations.sheets.aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = response
            result = await gateway.fetch_table(TabName.TIPOS)
        assert result == MOCK_MAINTENANCE_TYPES
