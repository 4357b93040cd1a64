"""Application configuration management using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


GatewayName = Literal["tribopay", "pushinpay", "syncpay"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Required settings will raise validation errors if not provided.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="pix-checkout-backend", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")
    max_request_body_size: int = Field(default=1_048_576, description="Maximum request body size in bytes")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins",
    )

    # Supabase
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_secret_key: str = Field(..., description="Supabase secret key for backend operations")

    # Public URL this service is reachable at, used to build gateway callback URLs
    public_base_url: str = Field(default="", description="Public base URL of this service")

    # Gateway bound to the generic charge route
    pix_provider: GatewayName = Field(default="tribopay", description="Gateway used by POST /pix/charges")

    # TriboPay
    tribopay_api_key: str = Field(default="", description="TriboPay bearer API key")
    tribopay_base_url: str = Field(default="https://api.tribopay.com.br", description="TriboPay API base URL")

    # PushinPay (token lives in the pushinpay_config table)
    pushinpay_production_url: str = Field(
        default="https://api.pushinpay.com.br/api",
        description="PushinPay production API base URL",
    )
    pushinpay_sandbox_url: str = Field(
        default="https://api-sandbox.pushinpay.com.br/api",
        description="PushinPay sandbox API base URL",
    )

    # SyncPayments
    syncpay_client_id: str = Field(default="", description="SyncPayments partner client id")
    syncpay_client_secret: str = Field(default="", description="SyncPayments partner client secret")
    syncpay_base_url: str = Field(default="https://api.syncpayments.com.br", description="SyncPayments API base URL")

    # Webhooks / admin
    webhook_secret: str = Field(default="", description="Shared token appended to gateway callback URLs")
    admin_api_key: str = Field(default="", description="Key required in X-Admin-Key for admin routes")

    # Order status stream
    order_events_keepalive_seconds: float = Field(default=15.0, description="SSE keep-alive interval")
    order_events_buffer_size: int = Field(default=16, description="Per-subscriber event buffer size")

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
