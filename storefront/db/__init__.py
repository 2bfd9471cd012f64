"""Database helpers (engine/session export)."""

from .session import Base, create_engine_for_url, get_engine, make_sessionmaker

__all__ = ["Base", "create_engine_for_url", "get_engine", "make_sessionmaker"]
