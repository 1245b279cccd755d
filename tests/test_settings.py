import asyncio

import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from worldclock.config import settings as settings_module
from worldclock.config.settings import Settings, get_settings
from worldclock.data import database, repositories
from worldclock.tasks import prestart


def test_defaults():
    settings = Settings()
    assert settings.minus_sign == "−"
    assert settings.storage_key == "@worldclocks"
    assert settings.refresh_interval_seconds == 60
    assert settings.log_level == "INFO"


@pytest.mark.parametrize("glyph", ["−", "-"])
def test_minus_sign_accepts_unicode_and_ascii(glyph):
    assert Settings(minus_sign=glyph).minus_sign == glyph


@pytest.mark.parametrize("glyph", ["–", "minus", ""])
def test_minus_sign_rejects_other_glyphs(glyph):
    with pytest.raises(ValidationError):
        Settings(minus_sign=glyph)


def test_log_level_is_upper_cased_and_validated():
    assert Settings(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_storage_key_cannot_be_blank():
    assert Settings(storage_key="  @clocks ").storage_key == "@clocks"
    with pytest.raises(ValidationError):
        Settings(storage_key="   ")


def test_refresh_interval_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(refresh_interval_seconds=0)


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("APP_NAME", "Desk Clocks")
    monkeypatch.setenv("STORAGE_KEY", "@desk")
    monkeypatch.setenv("REFRESH_INTERVAL_SECONDS", "30")
    monkeypatch.setenv("MINUS_SIGN", "-")
    monkeypatch.setenv("SEARCH_LIMIT", "10")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    settings = settings_module._load_settings()

    assert settings.app_name == "Desk Clocks"
    assert settings.storage_key == "@desk"
    assert settings.refresh_interval_seconds == 30
    assert settings.minus_sign == "-"
    assert settings.search_limit == 10
    assert settings.log_level == "WARNING"


def test_invalid_environment_value_is_rejected(monkeypatch):
    monkeypatch.setenv("MINUS_SIGN", "~")
    with pytest.raises(ValidationError):
        settings_module._load_settings()


def test_database_path_for_sqlite_urls():
    settings = Settings(database_url="sqlite+aiosqlite:///data/clocks.db")
    assert str(settings.database_path()) == "data/clocks.db"
    with pytest.raises(ValueError):
        Settings(database_url="postgresql+asyncpg://localhost/clocks").database_path()


def test_prestart_creates_schema_and_seeds_device_zone(tmp_path, monkeypatch):
    db_file = tmp_path / "nested" / "clocks.db"
    url = f"sqlite+aiosqlite:///{db_file}"
    monkeypatch.setenv("DEVICE_TIMEZONE", "Australia/Perth")
    storage_key = get_settings().storage_key

    async def _run():
        engine = create_async_engine(url)
        session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
        monkeypatch.setattr(database, "engine", engine)
        monkeypatch.setattr(database, "settings", Settings(database_url=url))
        monkeypatch.setattr(prestart, "SessionLocal", session_factory)
        try:
            await prestart._prepare()
            async with session_factory() as session:
                return await repositories.get_value(session, storage_key)
        finally:
            await engine.dispose()

    stored = asyncio.run(_run())

    assert db_file.exists()
    assert stored == '["Australia/Perth"]'
