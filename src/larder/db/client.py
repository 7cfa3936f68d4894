"""
Larder - Supabase Client.

Low-level database access for the tables the shopping list reads. All
queries go through here; the matching engine itself never touches the
database.
"""

from typing import Any

from supabase import Client, create_client

from larder.config import settings

# Singleton client instance
_client: Client | None = None


class SupabaseNotConfigured(RuntimeError):
    """Raised when Supabase credentials are missing from the settings."""


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise SupabaseNotConfigured("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


def set_client(client: Client | None) -> None:
    """Replace the singleton (tests, or callers holding an authenticated client)."""
    global _client
    _client = client


# =============================================================================
# Saved Dishes
# =============================================================================


async def get_saved_dishes(user_id: str) -> list[dict]:
    """Get the ingredient columns of every dish a user saved."""
    client = get_client()
    response = (
        client.table("saved_dishes")
        .select("id,title,ingredients,suggested_sides,meal_type")
        .eq("user_id", user_id)
        .execute()
    )
    return response.data or []


# =============================================================================
# Library
# =============================================================================


async def get_library(user_id: str) -> dict | None:
    """Get a user's library row, or None if they never saved one."""
    client = get_client()
    response = client.table("user_library").select("*").eq("user_id", user_id).maybe_single().execute()
    # maybe_single() returns None instead of a response when no row matches
    if response is None:
        return None
    return response.data


async def upsert_library(user_id: str, payload: dict[str, Any]) -> dict:
    """Create or replace a user's library row."""
    client = get_client()
    data = {**payload, "user_id": user_id}
    response = client.table("user_library").upsert(data, on_conflict="user_id").execute()
    return response.data[0]


# =============================================================================
# Cooked Dishes
# =============================================================================


async def count_cooked_dishes(user_id: str) -> int:
    """Count the dishes a user marked as cooked."""
    client = get_client()
    response = client.table("cooked_dishes").select("id", count="exact").eq("user_id", user_id).execute()
    if response.count is not None:
        return response.count
    return len(response.data or [])


# =============================================================================
# Account Preferences
# =============================================================================


async def get_dietary_prefs(user_id: str) -> dict | None:
    """Get the raw `dietary` blob from a user's account preferences."""
    client = get_client()
    response = (
        client.table("account_prefs").select("dietary").eq("user_id", user_id).maybe_single().execute()
    )
    if response is None or not response.data:
        return None
    return response.data.get("dietary")
