"""Webhook API routes for payment gateway callbacks."""

import json
import logging

from fastapi import APIRouter, Request, status

from src.api.deps import WebhookToken
from src.core.config import GatewayName
from src.core.errors import MalformedWebhookError
from src.services.gateways.factory import build_gateway
from src.services.webhook_service import WebhookService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post(
    "/{provider}",
    status_code=status.HTTP_200_OK,
    summary="Handle gateway webhooks",
    description="Receives PIX status callbacks from TriboPay, PushinPay or SyncPayments.",
)
async def gateway_webhook(provider: GatewayName, request: Request, _: WebhookToken) -> dict[str, bool]:
    """Handle a gateway status callback.

    Unknown or missing identifiers and database failures are acknowledged
    like any other delivery so the gateway does not retry indefinitely.
    Only an unparseable body is answered with an error.

    Args:
        provider: Gateway that sent the callback.
        request: FastAPI request object for reading the raw body.

    Returns:
        dict: Acknowledgment.

    Raises:
        MalformedWebhookError: 500 if the body is not valid JSON.
    """
    payload = await request.body()

    try:
        body = json.loads(payload)
    except ValueError as e:
        logger.error("Malformed %s webhook body (%d bytes)", provider, len(payload))
        raise MalformedWebhookError() from e

    logger.debug("%s webhook payload: %s", provider, body)

    service = WebhookService(build_gateway(provider))
    await service.ingest(body)

    return {"received": True}
