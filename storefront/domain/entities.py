"""
Domain records returned by every storage backend.

Backends never leak ORM instances; they hand out these dataclasses so the
in-memory and relational implementations stay observably equivalent.
"""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional

UNCATEGORIZED = "Sem categoria"

# Fields a product patch may touch; anything else is ignored.
PRODUCT_FIELDS = (
    "name",
    "description",
    "price",
    "images",
    "category_id",
    "purchase_link",
    "terms",
    "is_active",
)
CATEGORY_FIELDS = ("name",)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize naive datetimes (SQLite hands those back) to aware UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class User:
    id: str
    username: str
    password_hash: str = field(repr=False)


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: str
    category_id: str
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    images: tuple[str, ...] = ()
    purchase_link: Optional[str] = None
    terms: Optional[str] = None
    is_active: bool = True

    def patched(self, fields: dict, updated_at: datetime) -> "Product":
        changes = {k: v for k, v in fields.items() if k in PRODUCT_FIELDS}
        if "images" in changes:
            changes["images"] = tuple(changes["images"] or ())
        if "price" in changes:
            changes["price"] = str(changes["price"])
        return replace(self, updated_at=updated_at, **changes)


@dataclass(frozen=True)
class ProductWithCategory(Product):
    category_name: str = UNCATEGORIZED

    @classmethod
    def from_product(cls, product: Product, category_name: Optional[str]) -> "ProductWithCategory":
        values = {f: getattr(product, f) for f in Product.__dataclass_fields__}
        return cls(category_name=category_name or UNCATEGORIZED, **values)

    @classmethod
    def join(cls, product: Product, category: Optional[Category]) -> "ProductWithCategory":
        return cls.from_product(product, category.name if category else None)


def category_sort_key(category: Category) -> tuple[str, str]:
    """Accent- and case-insensitive ordering, the raw name as tiebreak."""
    folded = unicodedata.normalize("NFKD", category.name)
    base = "".join(ch for ch in folded if not unicodedata.combining(ch)).casefold()
    return base, category.name


def sort_categories(categories) -> list[Category]:
    return sorted(categories, key=category_sort_key)


def sort_products(products) -> list[ProductWithCategory]:
    return sorted(products, key=lambda p: as_utc(p.created_at), reverse=True)
