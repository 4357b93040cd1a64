"""Order Pydantic schemas for API responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.models.order import OrderStatus, OrderType


class OrderResponse(BaseModel):
    """Schema for order API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Order unique identifier")
    type: OrderType = Field(description="Product type")
    status: OrderStatus = Field(description="Payment status")
    amount_cents: int = Field(ge=0, description="Amount in BRL cents")
    external_id: str = Field(description="Gateway correlation id")
    provider: str | None = Field(default=None, description="Gateway that issued the charge")
    created_at: datetime = Field(description="Creation timestamp")
