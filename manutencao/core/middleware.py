"""Authentication middleware."""
import logging
from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from manutencao.core.security import verify_jwt_token

logger = logging.getLogger(__name__)


def extract_token(request: Request) -> Optional[str]:
    """Bearer token from the Authorization header, else the access_token cookie."""
    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        token = auth_header.split(" ", 1)[1].strip()
        if token:
            return token
    return request.cookies.get("access_token")


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Reject unauthenticated calls to the API with a 401 JSON body.

    Paths outside ``api_prefixes`` (health, login, docs) pass through.
    """

    def __init__(self, app, api_prefixes: Optional[list[str]] = None):
        super().__init__(app)
        self.api_prefixes = api_prefixes or ["/api"]

    def _is_protected(self, path: str) -> bool:
        return any(path.startswith(p) for p in self.api_prefixes)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if request.method == "OPTIONS" or not self._is_protected(path):
            return await call_next(request)

        token = extract_token(request)
        if not token or not verify_jwt_token(token):
            logger.info("Rejected unauthenticated request", extra={"path": path})
            return JSONResponse(status_code=401, content={"detail": "Not authenticated"})

        return await call_next(request)
