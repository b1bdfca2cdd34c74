import pytest
from pydantic import ValidationError

from recipe_api.core.config import Settings


def _settings(**kwargs):
    kwargs.setdefault("secret_key", "s")
    kwargs.setdefault("database_url", "sqlite:///./recipes.db")
    return Settings(_env_file=None, **kwargs)


def test_async_url_uses_async_drivers():
    assert _settings(database_url="sqlite:///./recipes.db").async_database_url == "sqlite+aiosqlite:///./recipes.db"
    pg = _settings(database_url="postgresql://u:p@db:5432/recipes")
    assert pg.async_database_url == "postgresql+asyncpg://u:p@db:5432/recipes"
    legacy = _settings(database_url="postgres://u:p@db/recipes")
    assert legacy.async_database_url == "postgresql+asyncpg://u:p@db/recipes"


def test_explicit_async_url_is_kept():
    s = _settings(database_url="postgresql+asyncpg://u:p@db/recipes")
    assert s.async_database_url == "postgresql+asyncpg://u:p@db/recipes"
    assert s.is_sqlite is False


def test_secret_and_database_are_required(monkeypatch):
    for name in ("SECRET_KEY", "DATABASE_URL", "DB_CONNECTION_STRING"):
        monkeypatch.delenv(name, raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, secret_key="", database_url="sqlite:///./x.db")


def test_reads_original_env_names(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-env")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DB_CONNECTION_STRING", "postgresql://u:p@db/recipes")
    s = Settings(_env_file=None)
    assert s.secret_key == "from-env"
    assert s.database_url == "postgresql://u:p@db/recipes"
    assert s.port == 4000
    assert s.token_expire_minutes == 24 * 60


def test_cors_origins():
    assert _settings(cors_origins="https://a.io, https://b.io,").cors_origin_list == ["https://a.io", "https://b.io"]
    assert _settings(debug=True).cors_origin_list == ["*"]
