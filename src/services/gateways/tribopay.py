"""TriboPay gateway adapter (static bearer API key, amounts in cents)."""

import logging
from typing import Any

from src.core.errors import GatewayError, GatewayNotConfiguredError
from src.models.order import OrderType
from src.services.gateways.base import Payer, PixCharge, PixGateway, WebhookUpdate, webhook_amount_cents

logger = logging.getLogger(__name__)


class TriboPayGateway(PixGateway):
    """TriboPay cash-in deposits.

    TriboPay echoes back the externalId we send, so the id is always
    synthesized locally before the call.
    """

    name = "tribopay"
    paid_statuses = frozenset({"paid"})
    failed_statuses = frozenset({"failed"})
    requires_payer_contact = True

    async def is_configured(self) -> bool:
        return bool(self.settings.tribopay_api_key)

    async def create_charge(
        self,
        amount_cents: int,
        product_type: OrderType,
        payer: Payer,
    ) -> PixCharge:
        if not self.settings.tribopay_api_key:
            raise GatewayNotConfiguredError(provider=self.name)

        external_id = self.synthesize_external_id()
        data = await self._post_json(
            f"{self.settings.tribopay_base_url.rstrip('/')}/api/public/cash/deposits/pix",
            {
                "amount": amount_cents,
                "externalId": external_id,
                "postbackUrl": self.webhook_url,
                "method": "pix",
                "transactionOrigin": "cashin",
                "payer": {
                    "name": payer.name,
                    "email": payer.email,
                    "document": payer.document,
                },
            },
            headers={"Authorization": f"Bearer {self.settings.tribopay_api_key}"},
        )

        pix = data.get("pix") or {}
        code = pix.get("code")
        if not code:
            raise GatewayError(
                provider=self.name,
                message="Invalid response from payment provider",
                provider_response=data,
            )

        logger.info("TriboPay charge created: %s (%d cents)", external_id, amount_cents)
        return PixCharge(
            code=code,
            image_base64=pix.get("imageBase64"),
            external_id=external_id,
        )

    def normalize_webhook(self, payload: Any) -> WebhookUpdate | None:
        if not isinstance(payload, dict) or not payload.get("externalId"):
            return None

        amount = payload.get("amount")
        return WebhookUpdate(
            external_id=str(payload["externalId"]),
            status=self.map_status(payload.get("status")),
            raw_status=str(payload.get("status") or ""),
            amount_cents=webhook_amount_cents(amount),
        )
