import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from manutencao.core.config import get_settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def create_jwt_token(subject: str, expires_in: int, claims: Optional[Dict[str, Any]] = None) -> str:
    """Create a signed JWT token.

    Args:
        subject: Token subject (the user id).
        expires_in: Expiration time in seconds.
        claims: Optional claims to include.

    Returns:
        Signed JWT token string.
    """

    now = datetime.utcnow()
    payload: Dict[str, Any] = {"sub": subject, "iat": now, "exp": now + timedelta(seconds=expires_in)}
    if claims:
        payload.update(claims)
    return jwt.encode(payload, get_settings().JWT_SECRET, algorithm=ALGORITHM)


def verify_jwt_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a JWT token and return its payload if valid.

    Args:
        token: JWT token string.

    Returns:
        Decoded payload dict if valid; None otherwise.
    """

    try:
        return jwt.decode(token, get_settings().JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError as exc:
        logger.warning("JWT verification failed: %s", exc)
        return None
