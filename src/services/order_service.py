"""Order lookup service."""

from typing import Any
from uuid import UUID

from src.core.supabase import get_supabase_client


class OrderService:
    """Read access to the orders table."""

    def __init__(self) -> None:
        """Initialize order service with Supabase client."""
        self.client = get_supabase_client()

    async def get_order(self, order_id: UUID | str) -> dict[str, Any] | None:
        """Get an order by ID.

        Args:
            order_id: The order's UUID.

        Returns:
            dict | None: The order data or None if not found.
        """
        response = (
            self.client.table("orders")
            .select("*")
            .eq("id", str(order_id))
            .limit(1)
            .execute()
        )

        return response.data[0] if response and response.data else None
