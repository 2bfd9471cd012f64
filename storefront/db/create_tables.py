"""Utility script to create the database schema (and optionally seed it)."""
from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from storefront.core.config import get_settings
from storefront.repositories.seed import seed_storage
from storefront.repositories.sql_repository import SQLStorage

from .session import get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all(seed: bool = False) -> SQLStorage:
    storage = SQLStorage(get_engine())
    storage.create_schema()
    if seed:
        seed_storage(storage, get_settings())
    return storage


def main() -> None:
    ap = argparse.ArgumentParser(description="Create storefront tables in DATABASE_URL")
    ap.add_argument("--seed", action="store_true", help="Load the admin user and the demo catalog")
    args = ap.parse_args()
    try:
        create_all(seed=args.seed)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print("Database tables created successfully.")


if __name__ == "__main__":
    main()
