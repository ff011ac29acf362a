"""Settings from environment variables (prefix API_DOCS_) or a .env file."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults for rendering and logging."""

    model_config = SettingsConfigDict(env_prefix="API_DOCS_", env_file=".env", case_sensitive=False)

    default_format: str = "openapi-v3.0"
    server_url: str | None = None

    # Document info block
    doc_title: str = "Server API"
    doc_description: str = "Server administration and module APIs"
    doc_version: str = "2.0.0"

    # Observability
    log_level: str = "WARNING"
    log_format: str = "text"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        if v not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
