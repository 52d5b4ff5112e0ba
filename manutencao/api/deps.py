"""Request scoped dependencies shared by the API routers."""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from manutencao.core.exceptions import AuthenticationError, business_exception_to_http
from manutencao.core.middleware import extract_token
from manutencao.integrations.ai_gateway import AIGatewayService
from manutencao.schemas.auth import Theme, User
from manutencao.services.app_data import AppDataStore
from manutencao.services.auth import AuthService
from manutencao.services.reports import RecordFilters, ReferenceLookup, Visualization


@dataclass
class SessionContext:
    """The authenticated user and their UI preferences."""
    user: User
    theme: Theme


def get_app_data(request: Request) -> AppDataStore:
    return request.app.state.app_data


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_ai_gateway(request: Request) -> AIGatewayService:
    return request.app.state.ai_gateway


def get_lookup(store: AppDataStore = Depends(get_app_data)) -> ReferenceLookup:
    return ReferenceLookup.from_store(store)


async def get_current_user(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the user from the bearer token or the access_token cookie."""
    token = extract_token(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        return auth.user_from_token(token)
    except AuthenticationError as e:
        raise business_exception_to_http(e)


async def get_session_context(
    user: User = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
) -> SessionContext:
    return SessionContext(user=user, theme=auth.get_theme(user.id))


def get_record_filters(
    visualization: Visualization = Visualization.TODAS,
    equipamento_id: Optional[str] = None,
    mecanico_id: Optional[str] = None,
    setor_id: Optional[str] = None,
    tipo_manutencao_id: Optional[str] = None,
    causa: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    search: Optional[str] = None,
) -> RecordFilters:
    """Query string filters shared by history, dashboard and report routes."""
    return RecordFilters(
        visualization=visualization,
        equipamento_id=equipamento_id,
        mecanico_id=mecanico_id,
        setor_id=setor_id,
        tipo_manutencao_id=tipo_manutencao_id,
        causa=causa,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )
