"""
Application settings for the provider directory service.

- Defaults are intended for development use (in-memory provider store).
- For production, set environment variables to override fields.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Provider directory service configuration."""

    service_name: str = Field(
        default="provider-directory", description="Service name reported by /"
    )
    log_level: str = Field(default="INFO", description="Root log level")

    # Provider store configuration
    provider_store_backend: Literal["memory", "http"] = Field(
        default="memory",
        description="Which ProviderRepository implementation to use",
    )
    provider_seed_file: str | None = Field(
        default=None,
        description="JSON file of provider records loaded into the memory store",
    )

    # Document store configuration (http backend)
    document_store_url: str = Field(
        default="http://localhost:8081",
        description="URL of the provider document store",
    )
    document_store_timeout: float = Field(
        default=10.0,
        description="Timeout for document store requests in seconds",
    )
    document_store_auth_secret: str | None = Field(
        default=None,
        description="HS256 secret for service tokens sent to the document store",
    )

    # Search configuration
    search_timeout_seconds: float = Field(
        default=10.0,
        description="Abort a match request after this many seconds",
    )
    search_default_limit: int = Field(default=50, description="Default page size")
    search_max_limit: int = Field(default=100, description="Largest accepted page")
    search_include_inactive: bool = Field(
        default=True,
        description="Include providers without an active subscription/order",
    )

    # Reviews
    review_max_retries: int = Field(
        default=5,
        description="Attempts for a review append before reporting a conflict",
    )
    reviews_default_limit: int = Field(default=10, description="Review page size")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator(
        "search_timeout_seconds",
        "document_store_timeout",
        "search_default_limit",
        "search_max_limit",
        "review_max_retries",
        "reviews_default_limit",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v


settings = Settings()
