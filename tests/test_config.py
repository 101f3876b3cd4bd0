from app.platform.config import Settings


def test_defaults(monkeypatch):
    for key in ("DATABASE_URL", "PORT", "MAIL_USERNAME", "EMAIL_USER", "MAIL_FROM_ADDRESS"):
        monkeypatch.delenv(key, raising=False)

    settings = Settings(_env_file=None)

    assert settings.PORT == 5000
    assert settings.DATABASE_URL == "sqlite+aiosqlite:///./lasting_loves_waitlist.db"
    assert settings.MAIL_HOST == "smtp.gmail.com"
    assert settings.MAIL_PORT == 465
    assert settings.cors_origins == ["*"]


def test_legacy_email_variables(monkeypatch):
    monkeypatch.delenv("MAIL_USERNAME", raising=False)
    monkeypatch.delenv("MAIL_PASSWORD", raising=False)
    monkeypatch.delenv("MAIL_FROM_ADDRESS", raising=False)
    monkeypatch.setenv("EMAIL_USER", "team@lastingloves.com")
    monkeypatch.setenv("EMAIL_PASS", "app-password")

    settings = Settings(_env_file=None)

    assert settings.MAIL_USERNAME == "team@lastingloves.com"
    assert settings.MAIL_PASSWORD == "app-password"
    assert settings.sender_address == "team@lastingloves.com"


def test_postgres_urls_use_asyncpg():
    settings = Settings(DATABASE_URL="postgres://user:pw@db:5432/waitlist", _env_file=None)

    assert settings.DATABASE_URL == "postgresql+asyncpg://user:pw@db:5432/waitlist"


def test_cors_origins_are_split():
    settings = Settings(CORS_ORIGINS="https://lastingloves.com, https://www.lastingloves.com", _env_file=None)

    assert settings.cors_origins == ["https://lastingloves.com", "https://www.lastingloves.com"]
