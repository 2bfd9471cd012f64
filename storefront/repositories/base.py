"""
Storage interface shared by the in-memory and relational backends.

Both implementations must agree on every outcome: the same return values,
the same ``None``/``False`` results for missing or guarded records, and the
same exceptions. Shared rules that only read live here so they cannot drift.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from storefront.core.security import verify_password
from storefront.domain.entities import Category, Product, ProductWithCategory, User, utcnow


class Storage(ABC):
    """Credential store plus catalog store behind one capability."""

    def __init__(self, clock: Callable = utcnow) -> None:
        self._clock = clock

    # -------------------------- users --------------------------
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        """Return the user with ``user_id`` or None."""

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Case-sensitive exact lookup."""

    @abstractmethod
    def create_user(self, username: str, password: str) -> User:
        """Hash ``password`` and persist; raise DuplicateUsernameError if taken."""

    def validate_credentials(self, username: str, password: str) -> Optional[User]:
        # Unknown user and wrong password are indistinguishable to the caller.
        user = self.get_user_by_username(username)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    # -------------------------- categories --------------------------
    @abstractmethod
    def list_categories(self) -> list[Category]:
        """All categories ordered by name."""

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]:
        ...

    @abstractmethod
    def create_category(self, name: str) -> Category:
        ...

    @abstractmethod
    def update_category(self, category_id: str, fields: dict) -> Optional[Category]:
        ...

    @abstractmethod
    def delete_category(self, category_id: str) -> bool:
        """False when products still reference the category or it does not exist."""

    # -------------------------- products --------------------------
    @abstractmethod
    def list_products(self) -> list[ProductWithCategory]:
        """All products, newest first, with the category name joined in."""

    @abstractmethod
    def get_product(self, product_id: str) -> Optional[Product]:
        ...

    @abstractmethod
    def create_product(self, fields: dict) -> Product:
        ...

    @abstractmethod
    def update_product(self, product_id: str, fields: dict) -> Optional[Product]:
        """Shallow patch; fields absent from ``fields`` are left untouched."""

    @abstractmethod
    def delete_product(self, product_id: str) -> bool:
        ...


def new_product(product_id: str, fields: dict, now) -> Product:
    """Apply creation defaults to ``fields``: active, no images, empty optionals."""
    return Product(
        id=product_id,
        name=fields["name"],
        description=fields.get("description") or None,
        price=str(fields["price"]),
        images=tuple(fields.get("images") or ()),
        category_id=fields["category_id"],
        purchase_link=fields.get("purchase_link") or None,
        terms=fields.get("terms") or None,
        is_active=True if fields.get("is_active") is None else bool(fields["is_active"]),
        created_at=now,
        updated_at=now,
    )
