"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Kakao (Daum) search API configuration
    kakao_api_key: str = Field(default="", description="Kakao REST API key")
    kakao_base_url: str = Field(
        default="https://dapi.kakao.com/v2/search/blog",
        description="Blog search endpoint",
    )
    search_timeout: float = Field(default=10.0, description="HTTP request timeout in seconds")
    search_sort: Literal["accuracy", "recency"] = Field(
        default="accuracy", description="Server-side ranking of results"
    )
    search_page_size: int = Field(default=10, ge=1, le=50, description="Documents per request")

    # List ordering
    missing_datetime: Literal["now", "last"] = Field(
        default="now",
        description="Where undated records go when sorting by datetime",
    )

    # Application Configuration
    app_title: str = Field(default="Daum Blog Search", description="Application title")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(default=True, description="Use JSON log format")
    log_file: str | None = Field(default=None, description="Optional log file path")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
