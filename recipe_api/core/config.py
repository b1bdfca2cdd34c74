"""Application configuration from environment variables."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

from recipe_api.core.constants import DEFAULT_PORT, PASSWORD_HASH_ROUNDS, TOKEN_EXPIRE_MINUTES

# Driver used for the async engine, keyed by backend name
_ASYNC_DRIVERS = {
    "postgresql": "asyncpg",
    "sqlite": "aiosqlite",
}


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App
    app_name: str = "Recipe API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # HTTP
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    api_prefix: str = ""

    # Auth: signing secret is mandatory, there is no development fallback
    secret_key: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("secret_key", "SECRET_KEY"),
    )
    token_expire_minutes: int = Field(TOKEN_EXPIRE_MINUTES, ge=1)
    password_hash_rounds: int = Field(PASSWORD_HASH_ROUNDS, ge=4, le=31)

    # Database
    database_url: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("database_url", "DATABASE_URL", "DB_CONNECTION_STRING"),
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10
    # Create missing tables at startup (use Alembic in production)
    database_create_tables: bool = False

    # CORS: comma-separated list of allowed origins
    cors_origins: str = ""

    @property
    def async_database_url(self) -> str:
        """URL for the async engine (asyncpg for Postgres, aiosqlite for SQLite)."""
        url = make_url(self.database_url)
        backend = url.get_backend_name()
        if backend == "postgres":
            backend = "postgresql"
        driver = _ASYNC_DRIVERS.get(backend)
        if driver is None or url.drivername == f"{backend}+{driver}":
            return url.render_as_string(hide_password=False)
        return url.set(drivername=f"{backend}+{driver}").render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.database_url).get_backend_name() == "sqlite"

    @property
    def cors_origin_list(self) -> list[str]:
        if self.debug:
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance for the process entry point."""
    return Settings()
