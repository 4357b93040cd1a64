"""Order model type definitions for database operations."""

from datetime import datetime
from typing import Literal, TypedDict
from uuid import UUID


# Order status enum values matching database enum
OrderStatus = Literal["pending", "paid", "failed"]

# Product type selects price and the post-payment action on the client
OrderType = Literal["subscription", "whatsapp"]

TERMINAL_STATUSES: frozenset[str] = frozenset({"paid", "failed"})


class Order(TypedDict):
    """Order table row representation.

    Rows are never deleted; the table doubles as the payment ledger.
    """

    id: UUID
    external_id: str
    provider: str
    type: OrderType
    amount_cents: int
    status: OrderStatus
    created_at: datetime


class OrderCreate(TypedDict):
    """Data inserted right after a gateway accepts a charge."""

    external_id: str
    provider: str
    type: OrderType
    amount_cents: int
    status: OrderStatus


class OrderUpdate(TypedDict, total=False):
    """Data a webhook may change on an order.

    amount_cents is only present when the webhook carried an amount.
    """

    status: OrderStatus
    amount_cents: int
