from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Vocabulary API"
    environment: str = "dev"

    database_url: str = "sqlite:///./vocabulary.db"
    port: int = 5000

    # Shared secret for /verifyPassword; the token is accepted as a password too
    password: str | None = None
    token: str | None = None

    cors_origins: list[str] = ["*"]

    # Gemini; without a key the dummy provider answers "[]"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-pro"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    ai_timeout_sec: float = 120.0

    enrichment_batch_size: int = 10
    enrichment_delay_sec: float = 180.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
