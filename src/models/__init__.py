"""Database model type definitions."""

from src.models.gateway_config import GatewayEnvironment, PushinPayConfig
from src.models.order import Order, OrderCreate, OrderStatus, OrderType, OrderUpdate

__all__ = [
    "Order",
    "OrderCreate",
    "OrderStatus",
    "OrderType",
    "OrderUpdate",
    "GatewayEnvironment",
    "PushinPayConfig",
]
