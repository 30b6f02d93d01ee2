from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Booking backend (Google Apps Script web app).
    google_script_url: str = ""
    google_script_secret: str = ""
    google_script_timeout: float = 15.0

    # Admin panel session.
    admin_session_secret: str = ""
    admin_password: str = ""
    admin_cookie_name: str = "admin_session"
    admin_login_path: str = "/login"

    # Chat completion provider. Empty key -> keyword fallback replies.
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    llm_provider: str = "openai"

    business_slug: str = "idee-per-la-testa"
    businesses_dir: str = "businesses"

    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "*"

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
