from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "Tender Procurement Service"
    environment: str = "dev"
    log_level: str = "INFO"
    server_address: str = "0.0.0.0:8080"

    # ─────────── API ───────────
    api_prefix: str = "/api"
    request_id_header: str = "X-Request-Id"

    # per-operation deadline, seconds
    http_timeout: float = 4.0

    # ─────────── DATABASE ───────────
    database_url: str = Field(
        validation_alias=AliasChoices("database_url", "postgres_conn"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
