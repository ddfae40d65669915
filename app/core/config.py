from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from the environment."""

    app_name: str = "Invoice Generator API"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite:///./invoices.db"

    jwt_secret: str = "change-me-in-production-to-a-long-random-value"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "invoice-generator-api"
    jwt_audience: str = "invoice-generator-clients"
    jwt_expire_minutes: int = 60

    lookup_cache_ttl_seconds: float = 600.0
    default_page_size: int = 10
    max_page_size: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Ensure settings are constructed once per process."""

    return Settings()
