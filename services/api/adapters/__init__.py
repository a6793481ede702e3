"""
Storage backends for Pothole Pulse.

Pick one with STORAGE_BACKEND=json|sqlite|pg|supabase.
"""
import logging

from .base import StorageAdapter, StorageError

logger = logging.getLogger(__name__)

BACKENDS = ("json", "sqlite", "pg", "supabase")


def build_storage_adapter(settings) -> StorageAdapter:
    """
    Build the adapter named by `settings.storage_backend`.

    Raises:
        ValueError: unknown backend or missing backend configuration
    """
    backend = (settings.storage_backend or "").strip().lower()

    if backend == "json":
        from .json import JsonAdapter

        adapter = JsonAdapter(settings.data_dir)
        logger.info(f"✓ JSON adapter initialized (data_dir={settings.data_dir})")

    elif backend == "sqlite":
        from .sqlite import SqliteAdapter

        adapter = SqliteAdapter.from_url(settings.db_url)
        logger.info(f"✓ SQLite adapter initialized ({settings.db_url.split('://')[0]})")

    elif backend == "pg":
        from .pg import PgAdapter

        adapter = PgAdapter.from_url(settings.db_url)
        logger.info("✓ PostgreSQL adapter initialized")

    elif backend == "supabase":
        from .supabase import SupabaseAdapter

        adapter = SupabaseAdapter(
            url=settings.supabase_url,
            key=settings.supabase_key,
            timeout_s=settings.supabase_timeout_s,
        )
        logger.info("✓ Supabase adapter initialized")

    else:
        raise ValueError(
            f"Unknown STORAGE_BACKEND: {settings.storage_backend} (expected one of {', '.join(BACKENDS)})"
        )

    return adapter


__all__ = ["BACKENDS", "StorageAdapter", "StorageError", "build_storage_adapter"]
