import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from manutencao.api.ai import router as ai_router
from manutencao.api.auth import router as auth_router
from manutencao.api.data import router as data_router
from manutencao.api.reports import router as reports_router
from manutencao.core.config import get_settings
from manutencao.core.logging import setup_logging
from manutencao.core.middleware import AuthenticationMiddleware
from manutencao.integrations.ai_gateway import AIGatewayService
from manutencao.integrations.sheets import SheetsGateway
from manutencao.services.app_data import AppDataStore
from manutencao.services.auth import AuthService
from manutencao.services.crud import CrudFacade
from manutencao.web.router import router as web_router

settings = get_settings()


def create_app(
    gateway: Optional[SheetsGateway] = None,
    ai_gateway: Optional[AIGatewayService] = None,
    auth_service: Optional[AuthService] = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    setup_logging(log_file=settings.LOG_FILE or None)
    logger = logging.getLogger(__name__)

    app = FastAPI(
        title=settings.APP_NAME,
        description="""
        ## Manutenção Pro - Histórico de Manutenção

        Registro de ordens de serviço de equipamentos, histórico, relatórios
        filtrados e assistente de diagnóstico por IA.

        ### Armazenamento
        Todas as tabelas vivem em abas de uma planilha publicada como web app.
        Sem URL configurada (ou com a planilha fora do ar) a API responde com
        dados de demonstração e simula as gravações.

        ### Authentication
        Endpoints under `/api` require a bearer token. Use `/auth/login` to obtain one.
        """,
        version="1.0.0",
        openapi_tags=[
            {"name": "auth", "description": "Login, logout and user preferences"},
            {"name": "data", "description": "Cached tables, reference CRUD and maintenance history"},
            {"name": "reports", "description": "Dashboard, reports, CSV export and diagnostics search"},
            {"name": "ai", "description": "AI maintenance assistant"},
            {"name": "web", "description": "Printable pages"},
            {"name": "infra", "description": "Infrastructure and health check endpoints"},
        ],
    )

    gateway = gateway or SheetsGateway()
    app.state.sheets_gateway = gateway
    app.state.app_data = AppDataStore(gateway, CrudFacade(gateway))
    app.state.ai_gateway = ai_gateway or AIGatewayService()
    app.state.auth_service = auth_service or AuthService()

    # Auth middleware
    app.add_middleware(AuthenticationMiddleware, api_prefixes=["/api"])

    # CORS
    allowed_origins = settings.CORS_ORIGINS or ["http://localhost:3000"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(auth_router)
    app.include_router(data_router)
    app.include_router(reports_router)
    app.include_router(ai_router)
    app.include_router(web_router)

    # Healthcheck
    @app.get("/health", tags=["infra"])
    async def health():
        return {
            "status": "ok",
            "env": settings.ENV,
            "sheets_configured": app.state.sheets_gateway.is_configured,
        }

    # Global exception handler to log internal server errors to terminal
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception", extra={
                "method": request.method,
                "path": request.url.path,
            }
        )
        print(
            f"[ERROR] {request.method} {request.url.path} -> {exc.__class__.__name__}: {exc}",
            file=sys.stderr,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": f"{exc.__class__.__name__}: {str(exc)}",
                "path": request.url.path,
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        status_code = int(exc.status_code or 500)
        if status_code >= 500:
            logger.error(
                "HTTP %s at %s %s: %s",
                status_code,
                request.method,
                request.url.path,
                exc.detail,
            )
        return JSONResponse(
            status_code=status_code,
            content={
                "detail": exc.detail,
                "path": request.url.path,
            },
            headers=getattr(exc, "headers", None),
        )

    # Startup: load every table once (falls back to demo data when offline)
    @app.on_event("startup")
    async def startup_event():
        if not app.state.sheets_gateway.is_configured:
            logger.warning("SHEETS_URL not configured, running with demo data")
        saved = app.state.auth_service.saved_user()
        if saved:
            logger.info(f"Restored saved session for {saved.email}")
        await app.state.app_data.load_all()

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("manutencao.main:app", host=settings.APP_HOST, port=settings.APP_PORT, reload=True)
