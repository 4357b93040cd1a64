"""Admin gateway configuration schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.gateway_config import GatewayEnvironment


class PushinPayConfigCreate(BaseModel):
    """Schema for POST /admin/pushinpay."""

    model_config = ConfigDict(from_attributes=True)

    token: str = Field(min_length=1, description="PushinPay API token")
    environment: GatewayEnvironment = Field(default="sandbox", description="sandbox or production")

    @field_validator("environment", mode="before")
    @classmethod
    def default_to_sandbox(cls, value: Any) -> str:
        """Anything other than production is treated as sandbox."""
        return "production" if value == "production" else "sandbox"


class PushinPayConfigStatus(BaseModel):
    """Active PushinPay credential, without the token."""

    model_config = ConfigDict(from_attributes=True)

    configured: bool = Field(description="Whether a token has been saved")
    environment: GatewayEnvironment | None = Field(default=None, description="Environment of the active token")
    created_at: datetime | None = Field(default=None, description="When the active token was saved")


class PushinPayConfigSaved(BaseModel):
    """Acknowledgment for a saved credential."""

    success: bool = True
