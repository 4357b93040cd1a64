"""Gateway adapter selection."""

from typing import Any

from src.core.config import GatewayName, get_settings
from src.core.errors import NotFoundError
from src.core.http import get_http_client
from src.services.gateways.base import PixGateway
from src.services.gateways.pushinpay import PushinPayGateway
from src.services.gateways.syncpay import SyncPayGateway
from src.services.gateways.tribopay import TriboPayGateway

GATEWAYS: dict[str, type[PixGateway]] = {
    TriboPayGateway.name: TriboPayGateway,
    PushinPayGateway.name: PushinPayGateway,
    SyncPayGateway.name: SyncPayGateway,
}


def build_gateway(name: GatewayName | str | None = None) -> PixGateway:
    """Return the adapter for a gateway name.

    Args:
        name: Gateway name; defaults to the deployment's PIX_PROVIDER.

    Raises:
        NotFoundError: If the name is not a known gateway.
    """
    settings = get_settings()
    gateway_cls = GATEWAYS.get(name or settings.pix_provider)
    if gateway_cls is None:
        raise NotFoundError(f"Unknown payment provider: {name}")
    return gateway_cls(settings, get_http_client())


async def check_gateway_configuration(name: GatewayName | str | None = None) -> dict[str, Any]:
    """Check that a gateway has credentials, without contacting it.

    Returns:
        dict: Status with 'healthy' boolean and optional 'error' message.
    """
    try:
        gateway = build_gateway(name)
        if await gateway.is_configured():
            return {"healthy": True}
        return {"healthy": False, "error": f"{gateway.name} credentials are not configured"}
    except Exception as e:
        return {"healthy": False, "error": str(e)}
