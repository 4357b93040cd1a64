"""PIX charge creation business logic service."""

import logging
from dataclasses import dataclass
from typing import Any

from src.core.errors import PersistenceError, ValidationError
from src.core.supabase import get_supabase_client
from src.models.order import OrderCreate, OrderType
from src.services.gateways.base import Payer, PixGateway, normalize_cpf

logger = logging.getLogger(__name__)

# Prices in cents; the client never decides the amount
PRICE_TABLE: dict[OrderType, int] = {
    "subscription": 2990,
    "whatsapp": 15000,
}

# Product names used by older checkout pages
PRODUCT_ALIASES: dict[str, OrderType] = {
    "mensalidade": "subscription",
}


@dataclass
class CreatedCharge:
    """Canonical PIX payload returned to the checkout page."""

    code: str
    image_base64: str | None
    external_id: str
    order_id: str | None


def resolve_product(product: Any) -> tuple[OrderType, int]:
    """Resolve a product name to its order type and price.

    Raises:
        ValidationError: If the product is unknown.
    """
    if isinstance(product, str):
        order_type = PRODUCT_ALIASES.get(product, product)
        if order_type in PRICE_TABLE:
            return order_type, PRICE_TABLE[order_type]
    raise ValidationError("Invalid product")


class ChargeService:
    """Service that issues PIX charges through one gateway and records orders."""

    def __init__(self, gateway: PixGateway) -> None:
        """Initialize charge service.

        Args:
            gateway: The adapter bound to the calling route.
        """
        self.client = get_supabase_client()
        self.gateway = gateway

    async def create_order(
        self,
        product: str,
        payer_document: str | None,
        payer_name: str | None = None,
        payer_email: str | None = None,
        payer_phone: str | None = None,
    ) -> CreatedCharge:
        """Create a PIX charge and a pending order.

        Args:
            product: subscription or whatsapp.
            payer_document: Payer CPF, any formatting.
            payer_name: Payer name (required by some gateways).
            payer_email: Payer e-mail (required by some gateways).
            payer_phone: Optional payer phone.

        Returns:
            CreatedCharge: QR payload plus external and internal ids. order_id
            is None when the order could not be recorded.

        Raises:
            ValidationError: If product, document or payer data are invalid.
            GatewayError: If the gateway call fails.
        """
        order_type, amount_cents = resolve_product(product)

        cpf = normalize_cpf(payer_document)
        if cpf is None:
            raise ValidationError("CPF must contain 11 digits")

        if self.gateway.requires_payer_contact and (not payer_name or not payer_email):
            raise ValidationError("Name, e-mail and CPF are required")

        payer = Payer(document=cpf, name=payer_name, email=payer_email, phone=payer_phone)
        charge = await self.gateway.create_charge(amount_cents, order_type, payer)

        order_id = None
        try:
            order_id = await self._insert_order(
                {
                    "external_id": charge.external_id,
                    "provider": self.gateway.name,
                    "type": order_type,
                    "amount_cents": amount_cents,
                    "status": "pending",
                }
            )
        except PersistenceError as e:
            # The charge already exists at the gateway; the client still gets the code
            logger.error(
                "Failed to record %s order %s: %s",
                self.gateway.name,
                charge.external_id,
                str(e),
            )

        return CreatedCharge(
            code=charge.code,
            image_base64=charge.image_base64,
            external_id=charge.external_id,
            order_id=order_id,
        )

    async def _insert_order(self, order_data: OrderCreate) -> str:
        """Insert a pending order and return its id.

        Raises:
            PersistenceError: If the insert fails or returns no row.
        """
        try:
            response = self.client.table("orders").insert(order_data).execute()
        except Exception as e:
            raise PersistenceError(str(e)) from e

        if not response.data:
            raise PersistenceError("Insert returned no rows")

        order_id = str(response.data[0]["id"])
        logger.info(
            "Order %s created (%s, %s, %d cents)",
            order_id,
            order_data["external_id"],
            order_data["type"],
            order_data["amount_cents"],
        )
        return order_id
