#!/usr/bin/env python3
"""
Create an administrator account directly in the database.

Usage:
  DATABASE_URL=postgresql://... python scripts/create_user.py --username admin@loja.com [--password ...]
"""
from __future__ import annotations

import argparse
import getpass
import sys

from storefront.core.errors import DuplicateUsernameError
from storefront.db.session import get_engine
from storefront.repositories.sql_repository import SQLStorage
from storefront.routers.schemas import normalize_username


def main() -> None:
    ap = argparse.ArgumentParser(description="Create an admin user in the SQL store")
    ap.add_argument("--username", required=True, help="Login e-mail")
    ap.add_argument("--password", help="Password (prompted when omitted)")
    args = ap.parse_args()

    try:
        username = normalize_username(args.username)
    except ValueError:
        raise SystemExit("Username must be an e-mail address")
    password = args.password or getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password cannot be empty")

    storage = SQLStorage(get_engine())
    storage.create_schema()
    try:
        user = storage.create_user(username, password)
    except DuplicateUsernameError:
        raise SystemExit(f"User '{username}' already exists")
    print("OK: user created")
    print(f"  id: {user.id}")
    print(f"  username: {user.username}")


if __name__ == "__main__":
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
