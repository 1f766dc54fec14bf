"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    checkout_public_key: str
    customer_id: str
    checkout_base_url: str
    order_status_path: str = "/checkout/v1/order"
    boot_url: str | None = None
    order_validation_timeout_ms: int = 600_000
    order_validation_rate_ms: int = 1000
    order_validation_delay_ms: int = 2000
    order_request_timeout_seconds: float = 10
    checkout_platform: str = "desktop"
    browser_type: str = "external"
    redirect_url: str = "acnative://action"
    scheduler_frame_ms: int = 50
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
