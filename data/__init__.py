"""
Data layer for Veiligheidsbladen Beheer.

This module provides backend access through the DatabaseInterface,
StorageInterface and AuthInterface abstractions.
Use create_backend() to get all three for a backend.
"""

from typing import Literal, NamedTuple, Optional

from .interface import AuthInterface, AuthSubscription, DatabaseInterface, StorageInterface
from .memory_backend import InMemoryAuth, InMemoryDatabase, InMemoryStorage
from .supabase_backend import (
    SupabaseAuth,
    SupabaseDatabase,
    SupabaseStorage,
    create_supabase_client,
)


class Backend(NamedTuple):
    """The three backend services used by the application."""

    database: DatabaseInterface
    storage: StorageInterface
    auth: AuthInterface


def create_backend(
    backend: Literal["supabase", "memory"] = "supabase",
    url: Optional[str] = None,
    key: Optional[str] = None,
    bucket: Optional[str] = None,
) -> Backend:
    """
    Factory function to create backend services.

    Args:
        backend: "supabase" (hosted) or "memory" (offline demo/tests)
        url: Supabase project URL (supabase only)
        key: Supabase anon key (supabase only)
        bucket: Storage bucket name

    Returns:
        Backend with database, storage and auth

    Example:
        >>> backend = create_backend("memory")
        >>> backend.database.list_articles()
        []
    """
    if backend == "supabase":
        client = create_supabase_client(url, key)
        storage = SupabaseStorage(client, bucket) if bucket else SupabaseStorage(client)
        return Backend(SupabaseDatabase(client), storage, SupabaseAuth(client))
    elif backend == "memory":
        storage = InMemoryStorage(bucket) if bucket else InMemoryStorage()
        return Backend(InMemoryDatabase(), storage, InMemoryAuth())
    else:
        raise ValueError(f"Unknown backend: {backend}")


__all__ = [
    "DatabaseInterface",
    "StorageInterface",
    "AuthInterface",
    "AuthSubscription",
    "InMemoryDatabase",
    "InMemoryStorage",
    "InMemoryAuth",
    "SupabaseDatabase",
    "SupabaseStorage",
    "SupabaseAuth",
    "create_supabase_client",
    "Backend",
    "create_backend",
]
