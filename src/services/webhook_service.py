"""Gateway webhook ingestion service."""

import logging
from dataclasses import dataclass
from typing import Any

from src.core.supabase import get_supabase_client
from src.models.order import OrderUpdate
from src.services.gateways.base import PixGateway
from src.services.order_events import OrderStatusEvent, OrderStatusNotifier, get_order_notifier

logger = logging.getLogger(__name__)


@dataclass
class WebhookResult:
    """Outcome of one webhook delivery, for logging and tests."""

    external_id: str | None = None
    status: str | None = None
    rows_updated: int = 0
    ignored: bool = False


class WebhookService:
    """Applies one gateway's status callbacks to the orders table.

    Ingestion never fails towards the caller: missing identifiers,
    unknown orders and database errors are logged and absorbed so the
    gateway does not keep redelivering.
    """

    def __init__(self, gateway: PixGateway, notifier: OrderStatusNotifier | None = None) -> None:
        """Initialize webhook service.

        Args:
            gateway: Adapter whose vocabulary the payloads use.
            notifier: Status channel; defaults to the global notifier.
        """
        self.client = get_supabase_client()
        self.gateway = gateway
        self.notifier = notifier or get_order_notifier()

    async def ingest(self, payload: Any) -> WebhookResult:
        """Normalize a callback and update the matching order.

        Args:
            payload: Decoded JSON body of the callback.

        Returns:
            WebhookResult: What was applied.
        """
        update = self.gateway.normalize_webhook(payload)
        if update is None:
            logger.warning("%s webhook without identifier, ignoring", self.gateway.name)
            return WebhookResult(ignored=True)

        logger.info(
            "%s webhook for %s: %s -> %s",
            self.gateway.name,
            update.external_id,
            update.raw_status,
            update.status,
        )

        update_data: OrderUpdate = {"status": update.status}
        if update.amount_cents is not None:
            update_data["amount_cents"] = update.amount_cents

        # Unconditional write: concurrent deliveries resolve as last write wins
        try:
            response = (
                self.client.table("orders")
                .update(update_data)
                .eq("external_id", update.external_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "Failed to update order %s from %s webhook: %s",
                update.external_id,
                self.gateway.name,
                str(e),
            )
            return WebhookResult(external_id=update.external_id, status=update.status)

        rows = response.data or []
        if not rows:
            logger.info("No order matches %s external id %s", self.gateway.name, update.external_id)

        for row in rows:
            self.notifier.publish(OrderStatusEvent.from_row(row))

        if update.status == "paid":
            logger.info("Payment confirmed for %s", update.external_id)

        return WebhookResult(
            external_id=update.external_id,
            status=update.status,
            rows_updated=len(rows),
        )
