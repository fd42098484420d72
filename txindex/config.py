"""Application configuration."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment driven configuration for the API."""

    api_host: str = Field("0.0.0.0", validation_alias="API_HOST")
    api_port: int = Field(8000, validation_alias="API_PORT")

    index_backend: Literal["memory", "postgres"] = Field("memory", validation_alias="INDEX_BACKEND")
    seed_file: Path | None = Field(None, validation_alias="SEED_FILE")

    database_host: str = Field("db", validation_alias="DATABASE_HOST")
    database_port: int = Field(5432, validation_alias="DATABASE_PORT")
    database_user: str = Field("app", validation_alias="DATABASE_USER")
    database_password: str = Field("app", validation_alias="DATABASE_PASSWORD")
    database_name: str = Field("app", validation_alias="DATABASE_NAME")
    database_connect_timeout: float = Field(5.0, validation_alias="DATABASE_CONNECT_TIMEOUT")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
