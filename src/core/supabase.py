"""Supabase client singleton for database operations."""

from functools import lru_cache
from typing import Any

from supabase import Client, create_client

from src.core.config import get_settings

# Tables created by supabase/migrations; readiness fails until both exist
REQUIRED_TABLES = ("orders", "pushinpay_config")


@lru_cache
def get_supabase_client() -> Client:
    """Get cached Supabase client singleton for database operations.

    Uses the secret key, which bypasses RLS at the PostgREST level. Orders
    and gateway credentials are only ever written from this service.

    Returns:
        Client: Supabase client instance.
    """
    settings = get_settings()
    return create_client(
        settings.supabase_url,
        settings.supabase_secret_key,
    )


async def check_database_connection() -> dict[str, Any]:
    """Check that the database is reachable and migrated.

    Returns:
        dict: Connection status with 'healthy' boolean and optional 'error' message.
    """
    try:
        client = get_supabase_client()
    except Exception as e:
        return {"healthy": False, "error": str(e)}

    for table in REQUIRED_TABLES:
        try:
            client.table(table).select("*").limit(1).execute()
        except Exception as e:
            return {"healthy": False, "error": f"{table}: {e}"}
    return {"healthy": True}
