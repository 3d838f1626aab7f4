"""
Supabase client construction.

Builds async Supabase clients, optionally carrying a user's access token so
row-level security applies to every table call.

Dependencies: supabase, student_dashboard.configs
System role: Hosted store connection management
"""

from supabase import AsyncClient, AsyncClientOptions, acreate_client

from student_dashboard.configs.supabase import SupabaseSettings


async def create_store_client(
    settings: SupabaseSettings,
    access_token: str | None = None,
) -> AsyncClient:
    """
    Create an async Supabase client.

    Args:
        settings: Supabase connection settings
        access_token: Optional user JWT; table calls then run as that user

    Returns:
        AsyncClient: Configured client
    """
    headers: dict[str, str] = {}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"

    options = AsyncClientOptions(
        headers=headers,
        postgrest_client_timeout=settings.postgrest_timeout,
        # Server-side clients never persist sessions between requests
        persist_session=False,
        auto_refresh_token=False,
    )
    return await acreate_client(settings.url, settings.anon_key, options=options)


async def close_store_client(client: AsyncClient) -> None:
    """
    Release the HTTP sessions behind a client's table and auth calls.

    Args:
        client: Client created by create_store_client
    """
    await client.postgrest.aclose()
    await client.auth.close()
