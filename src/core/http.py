"""Shared outbound HTTP client for payment gateway calls."""

import logging

import httpx

logger = logging.getLogger(__name__)

# Global singleton instance
_http_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """Get or create the shared async HTTP client.

    Falls back to creating the client lazily when the application
    lifespan did not run (scripts, some tests).
    """
    global _http_client
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient()
    return _http_client


async def init_http_client() -> httpx.AsyncClient:
    """Initialize the shared HTTP client. Call at app startup."""
    client = get_http_client()
    logger.info("HTTP client initialized")
    return client


async def shutdown_http_client() -> None:
    """Close the shared HTTP client. Call at app shutdown."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
