"""PushinPay gateway adapter (database-stored token, amounts in cents)."""

import logging
from typing import Any

import httpx

from src.core.config import Settings
from src.core.errors import GatewayError, GatewayNotConfiguredError
from src.models.gateway_config import PushinPayConfig
from src.models.order import OrderType
from src.services.gateway_config_service import PushinPayConfigService
from src.services.gateways.base import (
    Payer,
    PixCharge,
    PixGateway,
    WebhookUpdate,
    is_number,
    webhook_amount_cents,
)

logger = logging.getLogger(__name__)

# Fields PushinPay may use for the transaction id, in lookup order
IDENTIFIER_FIELDS = ("id", "transaction_id", "reference", "uuid")


def _first_identifier(data: dict[str, Any]) -> str | None:
    for key in IDENTIFIER_FIELDS:
        value = data.get(key)
        if value:
            return str(value)
    return None


class PushinPayGateway(PixGateway):
    """PushinPay cash-in.

    The bearer token and environment are configured at runtime through the
    admin panel, so they are read from the credential table on each charge.
    """

    name = "pushinpay"
    paid_statuses = frozenset({"paid", "approved", "success"})
    failed_statuses = frozenset({"failed", "canceled", "refused"})

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient,
        config_service: PushinPayConfigService | None = None,
    ) -> None:
        super().__init__(settings, http_client)
        self._config_service = config_service

    @property
    def config_service(self) -> PushinPayConfigService:
        # Created lazily: webhook normalization never needs the database
        if self._config_service is None:
            self._config_service = PushinPayConfigService()
        return self._config_service

    def base_url(self, environment: str) -> str:
        if environment == "production":
            return self.settings.pushinpay_production_url.rstrip("/")
        return self.settings.pushinpay_sandbox_url.rstrip("/")

    async def load_config(self) -> PushinPayConfig | None:
        """Read the active credential; a failed lookup counts as not configured."""
        try:
            return await self.config_service.get_active_config()
        except Exception as e:
            logger.error("Failed to load PushinPay credentials: %s", str(e))
            return None

    async def is_configured(self) -> bool:
        config = await self.load_config()
        return bool(config and config.get("token"))

    async def create_charge(
        self,
        amount_cents: int,
        product_type: OrderType,
        payer: Payer,
    ) -> PixCharge:
        config = await self.load_config()
        if not config or not config.get("token"):
            raise GatewayNotConfiguredError(
                provider=self.name,
                message="PushinPay token is not configured in the admin panel",
            )

        data = await self._post_json(
            f"{self.base_url(config['environment'])}/pix/cashIn",
            {
                "value": amount_cents,
                "webhook_url": self.webhook_url,
                "split_rules": [],
            },
            headers={
                "Authorization": f"Bearer {config['token']}",
                "Accept": "application/json",
            },
        )

        code = data.get("qr_code")
        if not code:
            raise GatewayError(
                provider=self.name,
                message="Invalid response from payment provider",
                provider_response=data,
            )

        image = data.get("qr_code_base64")
        if isinstance(image, str) and image.startswith("data:"):
            image = image.split(",", 1)[-1]

        external_id = _first_identifier(data) or self.synthesize_external_id()
        logger.info(
            "PushinPay charge created: %s (%d cents, %s)",
            external_id,
            amount_cents,
            config["environment"],
        )
        return PixCharge(
            code=code,
            image_base64=image or None,
            external_id=external_id,
        )

    def normalize_webhook(self, payload: Any) -> WebhookUpdate | None:
        if not isinstance(payload, dict):
            return None
        external_id = _first_identifier(payload)
        if not external_id:
            return None

        raw_status = payload.get("status") or payload.get("payment_status") or ""
        amount = payload.get("value")
        if not is_number(amount):
            amount = payload.get("amount_cents")

        return WebhookUpdate(
            external_id=external_id,
            status=self.map_status(raw_status),
            raw_status=str(raw_status),
            amount_cents=webhook_amount_cents(amount),
        )
