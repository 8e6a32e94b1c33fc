"""Shared helpers for Supabase-backed stores."""

from typing import Any

from postgrest.exceptions import APIError

from nutrition_core.errors import ExternalStoreFailure


def execute(query: Any, operation: str) -> Any:
    """Execute a PostgREST query, mapping API errors to store failures."""
    try:
        return query.execute()
    except APIError as exc:
        raise ExternalStoreFailure(
            f"Supabase {operation} failed: {exc.message}", operation=operation
        ) from exc


def require_rows(response: Any, operation: str) -> list[dict[str, Any]]:
    """Return response rows, failing when a write returned nothing."""
    if not response.data:
        raise ExternalStoreFailure(
            f"Supabase {operation} returned no rows", operation=operation
        )
    return response.data
