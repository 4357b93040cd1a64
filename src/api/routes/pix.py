"""PIX charge creation API routes."""

from fastapi import APIRouter, status

from src.core.config import GatewayName
from src.schemas.pix import PixChargeCreate, PixChargeResponse
from src.services.charge_service import ChargeService
from src.services.gateways.factory import build_gateway

router = APIRouter(prefix="/pix", tags=["pix"])


async def _create_charge(data: PixChargeCreate, provider: str | None) -> PixChargeResponse:
    service = ChargeService(build_gateway(provider))
    charge = await service.create_order(
        product=data.type,
        payer_document=data.document,
        payer_name=data.name,
        payer_email=data.email,
        payer_phone=data.phone,
    )
    return PixChargeResponse(
        code=charge.code,
        image_base64=charge.image_base64,
        external_id=charge.external_id,
        order_id=charge.order_id,
    )


@router.post(
    "/charges",
    response_model=PixChargeResponse,
    status_code=status.HTTP_200_OK,
    summary="Create PIX charge",
    description="Creates a PIX charge with the deployment's configured gateway and records a pending order.",
)
async def create_charge(data: PixChargeCreate) -> PixChargeResponse:
    """Create a PIX charge with the default gateway.

    Args:
        data: Product and payer data.

    Returns:
        PixChargeResponse: PIX code, QR image and ids. Subscribe to
        /orders/{orderId}/events to learn when it is paid.
    """
    return await _create_charge(data, None)


@router.post(
    "/{provider}/charges",
    response_model=PixChargeResponse,
    status_code=status.HTTP_200_OK,
    summary="Create PIX charge with a specific gateway",
    description="Creates a PIX charge with the named gateway and records a pending order.",
)
async def create_provider_charge(provider: GatewayName, data: PixChargeCreate) -> PixChargeResponse:
    """Create a PIX charge with the gateway bound to this route.

    Args:
        provider: tribopay, pushinpay or syncpay.
        data: Product and payer data.

    Returns:
        PixChargeResponse: PIX code, QR image and ids.
    """
    return await _create_charge(data, provider)
