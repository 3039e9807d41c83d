"""
Service configuration, read from environment variables (PORTFOLIO_*) or a .env file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PORTFOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"
    data_path: Path = Path("data/portfolio.json")

    # Website enrichment
    website_lookup_enabled: bool = True
    lookup_timeout_seconds: float = Field(default=5.0, gt=0)
    lookup_max_workers: int = Field(default=4, ge=1)
    search_url: str = "https://www.google.com/search"

    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB


@lru_cache()
def get_settings() -> Settings:
    return Settings()
