"""
Unit tests for authentication, token handling and the session store.
"""

import pytest

from manutencao.core.exceptions import AuthenticationError, ValidationError
from manutencao.core.security import create_jwt_token, verify_jwt_token
from manutencao.schemas.auth import Theme, UserRole
from manutencao.services.auth import AuthService
from manutencao.services.session_store import USER_KEY, SessionStore


@pytest.mark.unit
class TestAuthService:

    def test_login_admin(self, auth_service: AuthService, session_store: SessionStore):
        token, user = auth_service.login("manutencao@termep.com.br", "termep123")

        assert user.id == "1"
        assert user.role == UserRole.ADMIN
        assert verify_jwt_token(token)["sub"] == "1"
        saved = session_store.get(USER_KEY)
        assert saved["email"] == "manutencao@termep.com.br"
        assert "password" not in saved

    def test_login_regular_user(self, auth_service: AuthService):
        _, user = auth_service.login("user@termep.com", "123")
        assert user.role == UserRole.USER

    def test_wrong_password(self, auth_service: AuthService, session_store: SessionStore):
        with pytest.raises(AuthenticationError) as exc_info:
            auth_service.login("manutencao@termep.com.br", "errada")

        assert "manutencao@termep.com.br / termep123" in exc_info.value.message
        assert session_store.get(USER_KEY) is None

    def test_empty_credentials(self, auth_service: AuthService):
        with pytest.raises(ValidationError):
            auth_service.login("", "")

    def test_logout_clears_saved_user(self, auth_service: AuthService):
        auth_service.login("user@termep.com", "123")
        assert auth_service.saved_user().email == "user@termep.com"

        auth_service.logout()
        assert auth_service.saved_user() is None

    def test_user_from_token(self, auth_service: AuthService):
        token, _ = auth_service.login("user@termep.com", "123")
        assert auth_service.user_from_token(token).name == "Operador"

    def test_token_for_unknown_user(self, auth_service: AuthService):
        token = create_jwt_token("999", 60)
        with pytest.raises(AuthenticationError):
            auth_service.user_from_token(token)

    def test_expired_token(self, auth_service: AuthService):
        token = create_jwt_token("1", -10)
        with pytest.raises(AuthenticationError):
            auth_service.user_from_token(token)

    def test_theme_per_user(self, auth_service: AuthService):
        assert auth_service.get_theme("1") == Theme.LIGHT
        auth_service.set_theme("1", Theme.DARK)

        assert auth_service.get_theme("1") == Theme.DARK
        assert auth_service.get_theme("2") == Theme.LIGHT


@pytest.mark.unit
class TestSessionStore:

    def test_values_survive_new_instance(self, tmp_path):
        path = tmp_path / "session.json"
        SessionStore(path).set("chave", {"a": 1})
        assert SessionStore(path).get("chave") == {"a": 1}

    def test_missing_file(self, tmp_path):
        assert SessionStore(tmp_path / "nada.json").get("chave", "padrao") == "padrao"

    def test_corrupt_file_is_ignored(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{quebrado", encoding="utf-8")
        store = SessionStore(path)

        assert store.get("chave") is None
        store.set("chave", "ok")
        assert store.get("chave") == "ok"

    def test_delete(self, session_store: SessionStore):
        session_store.set("chave", 1)
        session_store.delete("chave")
        session_store.delete("inexistente")
        assert session_store.get("chave") is None
