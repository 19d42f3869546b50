"""
Database module - Generic async client for a hosted PostgREST backend.

Provides reusable table access for any project backed by Supabase-style
REST endpoints.

Usage:
    from common.database import RestClient, set_backend_client, get_backend_client

    # Set up singleton
    client = RestClient()
    await client.connect(url, api_key)
    set_backend_client(client)

    # Access anywhere
    rows = await get_backend_client().table("profiles").select().execute()
"""

from common.database.rest_client import (
    RestClient,
    QueryBuilder,
    # Errors
    BackendError,
    RecordNotFoundError,
    DuplicateRecordError,
    BackendUnavailableError,
    # Singleton management
    set_backend_client,
    get_backend_client,
)

__all__ = [
    "RestClient",
    "QueryBuilder",
    "BackendError",
    "RecordNotFoundError",
    "DuplicateRecordError",
    "BackendUnavailableError",
    "set_backend_client",
    "get_backend_client",
]
