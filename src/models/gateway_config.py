"""PushinPay credential model type definitions."""

from datetime import datetime
from typing import Literal, TypedDict


GatewayEnvironment = Literal["sandbox", "production"]


class PushinPayConfig(TypedDict):
    """pushinpay_config table row representation.

    Rows are append-only; the most recently created row is the active one.
    """

    token: str
    environment: GatewayEnvironment
    created_at: datetime
