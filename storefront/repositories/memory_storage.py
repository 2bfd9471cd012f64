"""
In-memory storage backend.

Three dicts keyed by id. Everything is lost on restart; suitable for demos
and tests. A re-entrant lock serializes writers so check-then-act sequences
(duplicate usernames, guarded category deletes) stay atomic under the
threadpool FastAPI runs sync endpoints in.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from typing import Optional

from storefront.core.errors import DuplicateUsernameError
from storefront.core.security import hash_password
from storefront.domain.entities import (
    CATEGORY_FIELDS,
    Category,
    Product,
    ProductWithCategory,
    User,
    sort_categories,
    sort_products,
)
from storefront.repositories.base import Storage, new_product


class MemoryStorage(Storage):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._users: dict[str, User] = {}
        self._categories: dict[str, Category] = {}
        self._products: dict[str, Product] = {}
        self._lock = threading.RLock()

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        for user in list(self._users.values()):
            if user.username == username:
                return user
        return None

    def create_user(self, username: str, password: str) -> User:
        password_hash = hash_password(password)
        with self._lock:
            if self.get_user_by_username(username):
                raise DuplicateUsernameError()
            user = User(id=str(uuid.uuid4()), username=username, password_hash=password_hash)
            self._users[user.id] = user
            return user

    # -------------------------- categories --------------------------
    def list_categories(self) -> list[Category]:
        return sort_categories(self._categories.values())

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def create_category(self, name: str) -> Category:
        category = Category(id=str(uuid.uuid4()), name=name, created_at=self._clock())
        with self._lock:
            self._categories[category.id] = category
        return category

    def update_category(self, category_id: str, fields: dict) -> Optional[Category]:
        with self._lock:
            existing = self._categories.get(category_id)
            if not existing:
                return None
            updated = replace(existing, **{k: v for k, v in fields.items() if k in CATEGORY_FIELDS})
            self._categories[category_id] = updated
            return updated

    def delete_category(self, category_id: str) -> bool:
        with self._lock:
            if any(p.category_id == category_id for p in self._products.values()):
                return False
            return self._categories.pop(category_id, None) is not None

    # -------------------------- products --------------------------
    def list_products(self) -> list[ProductWithCategory]:
        rows = [
            ProductWithCategory.join(product, self._categories.get(product.category_id))
            for product in list(self._products.values())
        ]
        return sort_products(rows)

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def create_product(self, fields: dict) -> Product:
        product = new_product(str(uuid.uuid4()), fields, self._clock())
        with self._lock:
            self._products[product.id] = product
        return product

    def update_product(self, product_id: str, fields: dict) -> Optional[Product]:
        with self._lock:
            existing = self._products.get(product_id)
            if not existing:
                return None
            updated = existing.patched(fields, updated_at=self._clock())
            self._products[product_id] = updated
            return updated

    def delete_product(self, product_id: str) -> bool:
        with self._lock:
            return self._products.pop(product_id, None) is not None
