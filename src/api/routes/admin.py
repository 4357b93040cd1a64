"""Admin API routes for runtime gateway configuration."""

from fastapi import APIRouter, status

from src.api.deps import AdminKey
from src.schemas.admin import PushinPayConfigCreate, PushinPayConfigSaved, PushinPayConfigStatus
from src.services.gateway_config_service import PushinPayConfigService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/pushinpay",
    response_model=PushinPayConfigStatus,
    summary="Get PushinPay configuration",
    description="Reports whether a PushinPay token is configured and for which environment. Never returns the token.",
)
async def get_pushinpay_config(_: AdminKey) -> PushinPayConfigStatus:
    """Return the active PushinPay credential status."""
    service = PushinPayConfigService()
    return PushinPayConfigStatus(**await service.get_status())


@router.post(
    "/pushinpay",
    response_model=PushinPayConfigSaved,
    status_code=status.HTTP_200_OK,
    summary="Save PushinPay token",
    description="Stores a new PushinPay token. Credentials are append-only; the newest one is used.",
)
async def save_pushinpay_config(data: PushinPayConfigCreate, _: AdminKey) -> PushinPayConfigSaved:
    """Insert a new PushinPay credential row.

    Args:
        data: Token and environment.

    Returns:
        PushinPayConfigSaved: Acknowledgment.
    """
    service = PushinPayConfigService()
    await service.save_config(data.token, data.environment)
    return PushinPayConfigSaved()
