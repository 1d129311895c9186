"""
Shared configuration management for the document registry client.
"""

from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

CREATE_DOCUMENT_URL = "https://ismp.crpt.ru/api/v3/lk/documents/create"


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="REGISTRY_",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = "local"
    service_name: str = "registry-client"
    log_level: str = "info"


class RegistryClientConfig(BaseConfig):
    """Settings for the rate-limited document submitter."""

    # Remote registry
    create_document_url: str = CREATE_DOCUMENT_URL
    http_timeout: float = 10.0

    # Rate limiting (validated by RateLimitConfig, not here)
    window_seconds: float = 1.0
    max_requests_per_window: int = 1

    # Payload
    signature_field: Optional[str] = None


def get_config(**overrides: Any) -> RegistryClientConfig:
    """Get client configuration, with explicit overrides taking precedence over the environment."""
    return RegistryClientConfig(**overrides)
