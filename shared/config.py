"""
Shared configuration management for the Proposal Gateway.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ENGINE_URL = "http://localhost:8080"


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="GATEWAY_",
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Calculation engine
    engine_url: str = Field(
        default=DEFAULT_ENGINE_URL,
        validation_alias=AliasChoices("GATEWAY_ENGINE_URL", "ENGINE_URL", "engine_url"),
    )
    health_probe_timeout: float = Field(default=3.0, gt=0)
    engine_request_timeout: Optional[float] = Field(default=None)

    # Background work
    shutdown_grace_seconds: float = Field(default=1.0, ge=0)
    batch_simulated_seconds: float = Field(default=2.0, ge=0)

    # Credentials
    default_subject: str = Field(default="gateway-service")


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port)


def get_settings(**overrides) -> BaseConfig:
    """Read settings from the environment, applying explicit overrides."""
    return BaseConfig(**overrides)
