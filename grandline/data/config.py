"""
Database settings read from the environment (or a local ``.env``).
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ASYNC_DRIVERS = ("sqlite+aiosqlite://", "postgresql+asyncpg://")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DatabaseSettings(BaseSettings):
    """
    Connection and startup options for the game store.

    Env vars:
    - DATABASE_URL: sqlite+aiosqlite:///path.db (default) or postgresql+asyncpg://user:pw@host/db
    - DB_POOL_SIZE / DB_MAX_OVERFLOW / DB_POOL_TIMEOUT / DB_POOL_RECYCLE: PostgreSQL pool tuning
    - DB_ECHO: log every SQL statement
    - DB_AUTO_CREATE: create missing tables when the server starts
    - LOG_LEVEL: root log level for the server and CLI
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = Field(default="sqlite+aiosqlite:///./grandline.db")

    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_timeout: int = Field(default=30, ge=1, le=120)
    db_pool_recycle: int = Field(default=1800, ge=60)

    db_echo: bool = False
    db_auto_create: bool = True

    log_level: str = "INFO"

    @field_validator("database_url")
    @classmethod
    def require_async_driver(cls, v: str) -> str:
        if not v.startswith(ASYNC_DRIVERS):
            raise ValueError(f"DATABASE_URL must start with one of: {', '.join(ASYNC_DRIVERS)}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def get_engine_kwargs(self) -> dict:
        """Keyword arguments for ``create_async_engine``; SQLite gets no pool tuning."""
        kwargs = {"echo": self.db_echo}
        if not self.is_sqlite:
            kwargs.update(
                pool_size=self.db_pool_size,
                max_overflow=self.db_max_overflow,
                pool_timeout=self.db_pool_timeout,
                pool_recycle=self.db_pool_recycle,
                pool_pre_ping=True,
            )
        return kwargs


@lru_cache
def get_settings() -> DatabaseSettings:
    return DatabaseSettings()
