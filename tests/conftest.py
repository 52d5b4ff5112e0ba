"""
Test configuration and fixtures for the Manutenção Pro test suite.
Every fixture runs against the offline demo dataset: the spreadsheet gateway
is built without a URL so no request ever leaves the process.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from unittest.mock import MagicMock, AsyncMock

from manutencao.integrations.ai_gateway import AIGatewayService
from manutencao.integrations.sheets import SheetsGateway
from manutencao.main import create_app
from manutencao.services.app_data import AppDataStore
from manutencao.services.auth import AuthService
from manutencao.services.reports import ReferenceLookup
from manutencao.services.session_store import SessionStore

ADMIN_EMAIL = "manutencao@termep.com.br"
ADMIN_PASSWORD = "termep123"


@pytest.fixture
def offline_gateway() -> SheetsGateway:
    """Gateway with no URL: reads return demo data, writes are simulated."""
    return SheetsGateway(base_url="")


@pytest.fixture
def session_store(tmp_path) -> SessionStore:
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def auth_service(session_store: SessionStore) -> AuthService:
    return AuthService(store=session_store)


@pytest_asyncio.fixture
async def store(offline_gateway: SheetsGateway) -> AppDataStore:
    """App data store loaded with the demo tables."""
    data = AppDataStore(offline_gateway)
    await data.load_all()
    return data


@pytest_asyncio.fixture
async def lookup(store: AppDataStore) -> ReferenceLookup:
    return ReferenceLookup.from_store(store)


@pytest_asyncio.fixture
async def app(offline_gateway: SheetsGateway, auth_service: AuthService) -> FastAPI:
    application = create_app(
        gateway=offline_gateway,
        ai_gateway=AIGatewayService(api_key=""),
        auth_service=auth_service,
    )
    await application.state.app_data.load_all()
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_user(auth_service: AuthService) -> dict:
    """Logged-in admin with ready to use auth headers."""
    token, user = auth_service.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    return {
        "user": user,
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture
def json_response():
    """Factory of aiohttp-like responses whose json() returns the given body."""

    def factory(body, status: int = 200) -> MagicMock:
        response = MagicMock()
        response.status = status
        response.reason = "OK" if status < 400 else "Error"
        response.json = AsyncMock(return_value=body)
        return response

    return factory


@pytest.fixture
def sample_record_data() -> dict:
    """Entry form payload for a new maintenance record."""
    return {
        "equipamentoId": "4",
        "horimetroKm": "350,5",
        "horaChegada": "10:30",
        "dataInicial": "2023-11-20",
        "dataFinal": "",
        "empresaId": "1",
        "tipoManutencaoId": "2",
        "setorId": "3",
        "documentacaoOS": "OS-2023-004",
        "mecanicoId": "4",
        "defeitoFalha": "COMPRESSOR NÃO ARMA",
        "causaDiagnostico": "VÁLVULA DE ADMISSÃO TRAVADA",
        "solucaoProcedimentos": "LIMPEZA DA VÁLVULA",
        "valor": "450",
    }
