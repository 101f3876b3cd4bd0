from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Lasting Loves Waitlist"
    PORT: int = 5000
    DEBUG: bool = False
    CORS_ORIGINS: str = "*"
    LOG_DIR: str = "logs"

    # ── Database ────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./lasting_loves_waitlist.db"

    # ── Email Configuration ─────────────────────
    MAIL_HOST: str = "smtp.gmail.com"
    MAIL_PORT: int = 465
    MAIL_USERNAME: str = Field(
        default="", validation_alias=AliasChoices("MAIL_USERNAME", "EMAIL_USER")
    )
    MAIL_PASSWORD: str = Field(
        default="", validation_alias=AliasChoices("MAIL_PASSWORD", "EMAIL_PASS")
    )
    MAIL_ENCRYPTION: str = "ssl"
    MAIL_FROM_ADDRESS: Optional[str] = None
    MAIL_FROM_NAME: str = "Lasting Loves"

    EMAIL_RELAY_URL: str = ""
    EMAIL_RELAY_API_KEY: str = ""
    EMAIL_RELAY_TIMEOUT: int = 30

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def use_async_driver(cls, value: str) -> str:
        # Hosting providers hand out postgres:// URLs; the engine needs asyncpg
        if value.startswith("postgres://"):
            value = value.replace("postgres://", "postgresql://", 1)
        if value.startswith("postgresql://"):
            value = value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def sender_address(self) -> str:
        return self.MAIL_FROM_ADDRESS or self.MAIL_USERNAME


@lru_cache
def get_settings() -> Settings:
    return Settings()
