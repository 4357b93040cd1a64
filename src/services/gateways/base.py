"""Common interface for PIX payment gateways."""

import logging
import math
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, ClassVar
from urllib.parse import urlencode

import httpx

from src.core.config import Settings
from src.core.errors import GatewayError
from src.models.order import OrderStatus, OrderType

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def normalize_cpf(document: str | None) -> str | None:
    """Strip formatting from a CPF.

    Returns:
        str | None: The 11 digits, or None if the value does not have exactly 11.
    """
    if not isinstance(document, str):
        return None
    digits = _NON_DIGITS.sub("", document)
    return digits if len(digits) == 11 else None


def reais_to_cents(value: Any) -> int:
    """Convert a major-unit amount (e.g. 29.9) to integer cents."""
    return int((Decimal(str(value)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_reais(amount_cents: int) -> float:
    """Convert integer cents to the major-unit number gateways expect in JSON."""
    return float(Decimal(amount_cents) / 100)


def is_number(value: Any) -> bool:
    """True for finite JSON numbers; bools, NaN and infinities are excluded."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


# orders.amount_cents is a Postgres integer
MAX_AMOUNT_CENTS = 2**31 - 1


def webhook_amount_cents(value: Any, in_reais: bool = False) -> int | None:
    """Convert a callback amount to cents the orders table can store.

    Args:
        value: Amount as sent by the gateway.
        in_reais: Whether the gateway reports major units.

    Returns:
        int | None: The amount in cents, or None when it is missing,
        not a finite number, negative or too large to store.
    """
    if not is_number(value):
        return None
    cents = reais_to_cents(value) if in_reais else int(value)
    if not 0 <= cents <= MAX_AMOUNT_CENTS:
        logger.warning("Ignoring out-of-range webhook amount: %r", value)
        return None
    return cents


@dataclass
class Payer:
    """Payer data collected on the checkout page."""

    document: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None


@dataclass
class PixCharge:
    """Canonical result of a successful charge creation."""

    code: str
    external_id: str
    image_base64: str | None = None


@dataclass
class WebhookUpdate:
    """Canonical form of a gateway status callback."""

    external_id: str
    status: OrderStatus
    raw_status: str
    amount_cents: int | None = None


class PixGateway(ABC):
    """Base class for gateway adapters.

    Subclasses declare their status allow-lists and implement the two
    protocol conversions. Adapters never retry.
    """

    name: ClassVar[str]
    paid_statuses: ClassVar[frozenset[str]] = frozenset({"paid"})
    failed_statuses: ClassVar[frozenset[str]] = frozenset({"failed"})
    requires_payer_contact: ClassVar[bool] = False

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self.settings = settings
        self.http = http_client

    @abstractmethod
    async def create_charge(
        self,
        amount_cents: int,
        product_type: OrderType,
        payer: Payer,
    ) -> PixCharge:
        """Create a PIX charge with the gateway.

        Raises:
            GatewayError: If the gateway rejects the call or is unreachable.
        """

    @abstractmethod
    def normalize_webhook(self, payload: Any) -> WebhookUpdate | None:
        """Convert a gateway callback body into a WebhookUpdate.

        Returns None when the payload carries no identifier. Never raises.
        """

    @abstractmethod
    async def is_configured(self) -> bool:
        """Whether credentials for this gateway are available."""

    def map_status(self, raw_status: Any) -> OrderStatus:
        """Map a gateway status string onto the canonical vocabulary."""
        value = str(raw_status or "").strip().lower()
        if value in self.paid_statuses:
            return "paid"
        if value in self.failed_statuses:
            return "failed"
        return "pending"

    @property
    def webhook_url(self) -> str:
        """Public callback URL handed to the gateway."""
        base = self.settings.public_base_url.rstrip("/")
        if not base:
            logger.warning("PUBLIC_BASE_URL not set; %s callbacks will not reach this service", self.name)
            return ""
        url = f"{base}/api/v1/webhooks/{self.name}"
        if self.settings.webhook_secret:
            url = f"{url}?{urlencode({'token': self.settings.webhook_secret})}"
        return url

    def synthesize_external_id(self) -> str:
        """Build a surrogate external id when the gateway supplies none."""
        return f"{self.name}_{int(time.time() * 1000)}"

    async def _post_json(
        self,
        url: str,
        body: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """POST a JSON body and return the decoded JSON response.

        Raises:
            GatewayError: On transport failure or a non-2xx response.
        """
        try:
            response = await self.http.post(url, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error("%s request to %s failed: %s", self.name, url, str(e))
            raise GatewayError(provider=self.name, provider_response=str(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = response.text

        if not response.is_success:
            raise GatewayError(
                provider=self.name,
                provider_status=response.status_code,
                provider_response=data,
            )

        if not isinstance(data, dict):
            raise GatewayError(
                provider=self.name,
                message="Invalid response from payment provider",
                provider_status=response.status_code,
                provider_response=data,
            )
        return data
