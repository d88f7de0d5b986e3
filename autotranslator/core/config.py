from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Runtime configuration loaded from environment or .env."""

    config_path: str = Field(default="translator.config.json", alias="TRANSLATOR_CONFIG")
    translator_endpoint: str = Field(
        default="https://api.cognitive.microsofttranslator.com/translate",
        alias="TRANSLATOR_ENDPOINT",
    )
    translator_api_version: str = Field(default="3.0", alias="TRANSLATOR_API_VERSION")
    request_timeout_seconds: float = Field(default=15.0, alias="TRANSLATOR_TIMEOUT_SECONDS")
    retry_count: int = Field(default=3, ge=1, alias="TRANSLATOR_RETRY_COUNT")
    retry_delay_ms: int = Field(default=1000, ge=0, alias="TRANSLATOR_RETRY_DELAY_MS")
    max_concurrency: int = Field(default=8, ge=1, alias="TRANSLATOR_MAX_CONCURRENCY")
    today_text: str = Field(default="Hoje", alias="TRANSLATOR_TODAY_TEXT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> AppSettings:
    """Return cached runtime settings."""
    return AppSettings()  # type: ignore[call-arg]
