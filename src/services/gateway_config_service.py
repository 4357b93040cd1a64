"""PushinPay credential storage service."""

import logging
from typing import Any

from src.core.supabase import get_supabase_client
from src.models.gateway_config import GatewayEnvironment, PushinPayConfig

logger = logging.getLogger(__name__)

CONFIG_TABLE = "pushinpay_config"


class PushinPayConfigService:
    """Service for the append-only PushinPay credential table.

    Tokens are never updated in place; saving inserts a new row and the
    newest row becomes the active credential.
    """

    def __init__(self) -> None:
        """Initialize config service with Supabase client."""
        self.client = get_supabase_client()

    async def get_active_config(self) -> PushinPayConfig | None:
        """Get the most recently created credential row.

        Returns:
            PushinPayConfig | None: The active credential or None if none saved.
        """
        response = (
            self.client.table(CONFIG_TABLE)
            .select("token, environment, created_at")
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )

        return response.data[0] if response and response.data else None

    async def get_status(self) -> dict[str, Any]:
        """Describe the active credential without exposing the token.

        Returns:
            dict: configured flag, environment and created_at of the newest row.
        """
        config = await self.get_active_config()
        return {
            "configured": config is not None,
            "environment": config["environment"] if config else None,
            "created_at": config["created_at"] if config else None,
        }

    async def save_config(self, token: str, environment: GatewayEnvironment) -> dict[str, Any]:
        """Insert a new credential row.

        Args:
            token: PushinPay API token.
            environment: sandbox or production.

        Returns:
            dict: The inserted row.
        """
        response = (
            self.client.table(CONFIG_TABLE)
            .insert({"token": token, "environment": environment})
            .execute()
        )

        logger.info("PushinPay credential saved for %s environment", environment)
        return response.data[0] if response.data else {}
