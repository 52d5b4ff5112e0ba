from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

SHEETS_URL_PLACEHOLDER = "INSIRA_SUA_URL"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev", description="dev|staging|prod")
    APP_NAME: str = "Manutenção Pro API"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8081
    LOG_FILE: str = "app-debug.log"

    # Segurança
    JWT_SECRET: str = "change-me"
    ACCESS_EXPIRES_MIN: int = 480

    # Planilha (Google Apps Script web app)
    SHEETS_URL: str = Field(
        default=f"https://script.google.com/macros/s/{SHEETS_URL_PLACEHOLDER}/exec",
        description="URL do web app que expõe as abas da planilha",
    )
    SHEETS_TIMEOUT_SECONDS: float = 10.0

    # Assistente IA
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    AI_TIMEOUT_SECONDS: float = 60.0

    # Sessão local
    SESSION_FILE: str = ".manutencao_session.json"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
