"""SyncPayments gateway adapter (client-credential token exchange, amounts in reais)."""

import logging
import re
from typing import Any

from src.core.errors import GatewayError, GatewayNotConfiguredError
from src.models.order import OrderType
from src.services.gateways.base import (
    Payer,
    PixCharge,
    PixGateway,
    WebhookUpdate,
    cents_to_reais,
    webhook_amount_cents,
)

logger = logging.getLogger(__name__)

DESCRIPTIONS = {
    "subscription": "Assinatura",
    "whatsapp": "Pagamento",
}


class SyncPayGateway(PixGateway):
    """SyncPayments partner cash-in.

    A fresh access token is requested for every charge; there is no
    caching or refresh.
    """

    name = "syncpay"
    paid_statuses = frozenset({"paid", "approved", "completed"})
    failed_statuses = frozenset({"failed", "expired", "cancelled"})
    requires_payer_contact = True

    @property
    def base_url(self) -> str:
        return self.settings.syncpay_base_url.rstrip("/")

    async def is_configured(self) -> bool:
        return bool(self.settings.syncpay_client_id and self.settings.syncpay_client_secret)

    async def get_access_token(self) -> str:
        """Exchange client credentials for a short-lived access token.

        Raises:
            GatewayNotConfiguredError: If client credentials are missing.
            GatewayError: If the exchange fails.
        """
        if not self.settings.syncpay_client_id or not self.settings.syncpay_client_secret:
            raise GatewayNotConfiguredError(provider=self.name)

        data = await self._post_json(
            f"{self.base_url}/api/partner/v1/auth-token",
            {
                "client_id": self.settings.syncpay_client_id,
                "client_secret": self.settings.syncpay_client_secret,
            },
        )

        token = data.get("access_token")
        if not token:
            raise GatewayError(
                provider=self.name,
                message="Authentication with the payment provider failed",
                provider_response=data,
            )
        return token

    async def create_charge(
        self,
        amount_cents: int,
        product_type: OrderType,
        payer: Payer,
    ) -> PixCharge:
        access_token = await self.get_access_token()

        data = await self._post_json(
            f"{self.base_url}/api/partner/v1/cash-in",
            {
                "amount": cents_to_reais(amount_cents),
                "description": DESCRIPTIONS.get(product_type, "Pagamento"),
                "webhook_url": self.webhook_url,
                "client": {
                    "name": payer.name,
                    "cpf": payer.document,
                    "email": payer.email,
                    "phone": re.sub(r"\D", "", payer.phone or ""),
                },
            },
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
        )

        code = data.get("pix_code")
        if not code:
            raise GatewayError(
                provider=self.name,
                message="Invalid response from payment provider",
                provider_response=data,
            )

        external_id = str(data["identifier"]) if data.get("identifier") else self.synthesize_external_id()
        logger.info("SyncPayments charge created: %s (%d cents)", external_id, amount_cents)
        return PixCharge(code=code, external_id=external_id)

    def normalize_webhook(self, payload: Any) -> WebhookUpdate | None:
        if not isinstance(payload, dict) or not payload.get("identifier"):
            return None

        amount = payload.get("amount")
        return WebhookUpdate(
            external_id=str(payload["identifier"]),
            status=self.map_status(payload.get("status")),
            raw_status=str(payload.get("status") or ""),
            amount_cents=webhook_amount_cents(amount, in_reais=True),
        )
