"""In-memory publish/subscribe channel for order status changes."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass
from threading import Lock
from typing import Any, AsyncIterator

logger = logging.getLogger(__name__)


@dataclass
class OrderStatusEvent:
    """A status change on one order row."""

    order_id: str
    status: str
    type: str | None = None
    amount_cents: int | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "OrderStatusEvent":
        """Build an event from an orders table row."""
        return cls(
            order_id=str(row["id"]),
            status=row["status"],
            type=row.get("type"),
            amount_cents=row.get("amount_cents"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class OrderEventsConfig:
    """Configuration for the order status channel."""

    buffer_size: int = 16  # Events buffered per subscriber before dropping
    keepalive_seconds: float = 15.0  # Idle interval before an SSE keep-alive

    @classmethod
    def from_settings(cls) -> "OrderEventsConfig":
        """Create config from application settings."""
        from src.core.config import get_settings
        settings = get_settings()
        return cls(
            buffer_size=settings.order_events_buffer_size,
            keepalive_seconds=settings.order_events_keepalive_seconds,
        )


class OrderStatusNotifier:
    """Fan-out of order status events to live subscribers, keyed by order id.

    Delivery is at-most-once: nothing is stored for absent subscribers and
    a subscriber with a full buffer misses the event.
    """

    def __init__(self, config: OrderEventsConfig | None = None) -> None:
        self.config = config or OrderEventsConfig()
        self._subscribers: dict[str, set[asyncio.Queue]] = defaultdict(set)
        self._lock = Lock()

    @asynccontextmanager
    async def subscribe(self, order_id: str) -> AsyncIterator[asyncio.Queue]:
        """Register a subscriber queue for one order.

        The queue receives OrderStatusEvent items, or None when the
        channel is shutting down.
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.config.buffer_size)
        with self._lock:
            self._subscribers[order_id].add(queue)
        logger.debug("Subscribed to order %s", order_id)
        try:
            yield queue
        finally:
            with self._lock:
                queues = self._subscribers.get(order_id)
                if queues is not None:
                    queues.discard(queue)
                    if not queues:
                        del self._subscribers[order_id]
            logger.debug("Unsubscribed from order %s", order_id)

    def publish(self, event: OrderStatusEvent) -> int:
        """Deliver an event to every current subscriber of its order.

        Returns:
            int: Number of subscribers the event was delivered to.
        """
        with self._lock:
            queues = list(self._subscribers.get(event.order_id, ()))

        delivered = 0
        for queue in queues:
            try:
                queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning("Dropped %s event for order %s: subscriber buffer full", event.status, event.order_id)
        return delivered

    def subscriber_count(self, order_id: str) -> int:
        with self._lock:
            return len(self._subscribers.get(order_id, ()))

    def close_all(self) -> None:
        """Signal every subscriber to stop."""
        with self._lock:
            queues = [q for qs in self._subscribers.values() for q in qs]
        for queue in queues:
            try:
                queue.put_nowait(None)
            except asyncio.QueueFull:
                pass

    def get_stats(self) -> dict:
        """Get channel statistics for monitoring."""
        with self._lock:
            return {
                "orders": len(self._subscribers),
                "subscribers": sum(len(qs) for qs in self._subscribers.values()),
            }


# Global singleton instance
_notifier: OrderStatusNotifier | None = None


def get_order_notifier() -> OrderStatusNotifier:
    """Get or create the global order status notifier."""
    global _notifier
    if _notifier is None:
        _notifier = OrderStatusNotifier(OrderEventsConfig.from_settings())
    return _notifier


async def init_order_notifier() -> OrderStatusNotifier:
    """Initialize the notifier. Call at app startup."""
    return get_order_notifier()


async def shutdown_order_notifier() -> None:
    """Release open subscriptions. Call at app shutdown."""
    global _notifier
    if _notifier:
        _notifier.close_all()
        _notifier = None
