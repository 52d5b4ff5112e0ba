import logging
from typing import Optional, Tuple

from manutencao.core.config import get_settings
from manutencao.core.exceptions import AuthenticationError, ErrorHandler
from manutencao.core.fallback_data import MOCK_USERS
from manutencao.core.security import create_jwt_token, verify_jwt_token
from manutencao.schemas.auth import Theme, User
from manutencao.services.session_store import USER_KEY, SessionStore, theme_key

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Credenciais inválidas. Tente manutencao@termep.com.br / termep123"


def _public_user(raw: dict) -> User:
    return User.model_validate({k: v for k, v in raw.items() if k != "password"})


class AuthService:
    """Authentication against the fixed user list, with a persisted session."""

    def __init__(self, store: Optional[SessionStore] = None) -> None:
        self.store = store or SessionStore()

    def login(self, email: str, password: str) -> Tuple[str, User]:
        """Check credentials, persist the session and issue a token.

        Args:
            email: Login email.
            password: Plain password.

        Returns:
            Tuple of access_token and the public user record.

        Raises:
            AuthenticationError: If no user matches both email and password.
        """

        ErrorHandler.validate_required_fields({"email": email, "password": password}, ["email", "password"])
        raw = next((u for u in MOCK_USERS if u["email"] == email and u["password"] == password), None)
        if raw is None:
            logger.warning(f"Login rejected for {email}")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        user = _public_user(raw)
        self.store.set(USER_KEY, user.model_dump(mode="json"))
        access_expires = get_settings().ACCESS_EXPIRES_MIN * 60
        token = create_jwt_token(user.id, access_expires, {"role": user.role.value, "email": user.email})
        logger.info(f"User {user.email} logged in")
        return token, user

    def logout(self) -> None:
        self.store.delete(USER_KEY)
        logger.info("Session cleared")

    def saved_user(self) -> Optional[User]:
        """User persisted by the last login, if any."""
        data = self.store.get(USER_KEY)
        if not isinstance(data, dict):
            return None
        try:
            return User.model_validate(data)
        except ValueError as e:
            logger.error(f"Discarding unreadable saved session: {e}")
            return None

    def user_from_token(self, token: str) -> User:
        """Resolve the user a bearer token was issued for.

        Raises:
            AuthenticationError: If the token is invalid or the user is unknown.
        """

        payload = verify_jwt_token(token)
        if not payload:
            raise AuthenticationError("Invalid or expired token")
        raw = next((u for u in MOCK_USERS if u["id"] == payload.get("sub")), None)
        if raw is None:
            raise AuthenticationError("Unknown user")
        return _public_user(raw)

    def get_theme(self, user_id: str) -> Theme:
        value = self.store.get(theme_key(user_id))
        try:
            return Theme(value) if value else Theme.LIGHT
        except ValueError:
            return Theme.LIGHT

    def set_theme(self, user_id: str, theme: Theme) -> Theme:
        self.store.set(theme_key(user_id), theme.value)
        return theme
