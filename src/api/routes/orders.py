"""Order status API routes."""

import asyncio
import json
import logging
from typing import Any, AsyncGenerator
from uuid import UUID

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from src.api.deps import Notifier
from src.core.errors import NotFoundError
from src.models.order import TERMINAL_STATUSES
from src.schemas.order import OrderResponse
from src.services.order_events import OrderStatusEvent, OrderStatusNotifier
from src.services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def format_sse(event: str, data: dict[str, Any]) -> str:
    """Encode one Server-Sent Events message."""
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


async def order_event_stream(
    order_id: str,
    notifier: OrderStatusNotifier,
    keepalive_seconds: float,
    order_service: OrderService,
) -> AsyncGenerator[str, None]:
    """Yield SSE messages for one order until it reaches a terminal status.

    The snapshot is read after the subscription is open, so a change
    published before the first message is either in the snapshot or in
    the queue.

    Args:
        order_id: Order to follow.
        notifier: Status channel to subscribe to.
        keepalive_seconds: Idle interval before a keep-alive comment.
        order_service: Source of the snapshot.
    """
    async with notifier.subscribe(order_id) as queue:
        order = await order_service.get_order(order_id)
        if not order:
            return

        snapshot = OrderStatusEvent.from_row(order)
        yield format_sse("status", snapshot.to_dict())
        if snapshot.status in TERMINAL_STATUSES:
            return

        while True:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=keepalive_seconds)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue

            if event is None:
                return

            yield format_sse("status", event.to_dict())
            if event.status in TERMINAL_STATUSES:
                logger.debug("Order %s reached %s, closing stream", order_id, event.status)
                return


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order by ID",
    description="Returns the stored state of an order.",
)
async def get_order(order_id: UUID) -> OrderResponse:
    """Get a single order by ID.

    Raises:
        NotFoundError: 404 if order not found.
    """
    order = await OrderService().get_order(order_id)
    if not order:
        raise NotFoundError("Order not found")
    return OrderResponse(**order)


@router.get(
    "/{order_id}/events",
    summary="Stream order status",
    description="Server-Sent Events stream of status changes for one order. Closes once the order is paid or failed.",
    response_class=StreamingResponse,
)
async def stream_order_events(order_id: UUID, notifier: Notifier) -> StreamingResponse:
    """Open a status stream for the order the checkout page is waiting on.

    Raises:
        NotFoundError: 404 if order not found.
    """
    order_service = OrderService()
    if not await order_service.get_order(order_id):
        raise NotFoundError("Order not found")

    return StreamingResponse(
        order_event_stream(str(order_id), notifier, notifier.config.keepalive_seconds, order_service),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
