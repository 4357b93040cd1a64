"""FastAPI dependency injection functions."""

import hmac
from typing import Annotated

from fastapi import Depends, Header, Query

from src.core.config import get_settings
from src.core.errors import AuthenticationError, AuthorizationError
from src.services.order_events import OrderStatusNotifier, get_order_notifier


async def require_admin_key(
    x_admin_key: Annotated[str, Header(description="Admin API key")] = "",
) -> None:
    """Guard admin routes with the configured ADMIN_API_KEY.

    When no key is configured the admin routes are open.

    Raises:
        AuthorizationError: 403 if the header does not match.
    """
    expected = get_settings().admin_api_key
    if not expected:
        return
    if not hmac.compare_digest(x_admin_key.encode(), expected.encode()):
        raise AuthorizationError("Invalid admin key")


async def verify_webhook_token(
    token: Annotated[str, Query(description="Webhook token embedded in the callback URL")] = "",
) -> None:
    """Check the token gateways echo back from the callback URL.

    Only enforced when WEBHOOK_SECRET is set.

    Raises:
        AuthenticationError: 401 if the token does not match.
    """
    expected = get_settings().webhook_secret
    if not expected:
        return
    if not hmac.compare_digest(token.encode(), expected.encode()):
        raise AuthenticationError("Invalid webhook token")


def get_notifier() -> OrderStatusNotifier:
    """Dependency for the order status channel."""
    return get_order_notifier()


AdminKey = Annotated[None, Depends(require_admin_key)]
WebhookToken = Annotated[None, Depends(verify_webhook_token)]
Notifier = Annotated[OrderStatusNotifier, Depends(get_notifier)]
