"""
Persistence adapters.

Services and routers depend on the Storage interface; build_storage() picks
the in-memory or the SQLAlchemy-backed implementation from Settings.
"""

from __future__ import annotations

from storefront.core.config import Settings
from storefront.repositories.base import Storage
from storefront.repositories.memory_storage import MemoryStorage
from storefront.repositories.seed import seed_storage


def build_storage(settings: Settings) -> Storage:
    """Construct and seed the backend named by ``settings.storage_backend``."""
    if settings.storage_backend == "memory":
        storage: Storage = MemoryStorage()
    elif settings.storage_backend == "sql":
        from storefront.db.session import create_engine_for_url
        from storefront.repositories.sql_repository import SQLStorage

        sql_storage = SQLStorage(create_engine_for_url(settings.database_url))
        sql_storage.create_schema()
        storage = sql_storage
    else:
        raise RuntimeError(f"Unknown STORAGE_BACKEND: {settings.storage_backend!r}")
    seed_storage(storage, settings)
    return storage


__all__ = ["Storage", "MemoryStorage", "build_storage", "seed_storage"]
