"""
Fixture data loaded into a fresh store: one administrator and a demo catalog.
"""

from __future__ import annotations

import logging

from storefront.core.config import Settings
from storefront.repositories.base import Storage

logger = logging.getLogger(__name__)

DEMO_CATEGORIES = ("Casa e Jardim", "Eletrônicos", "Roupas")

_WHATSAPP = "https://wa.me/5511999999999?text=Quero%20comprar%20"

DEMO_PRODUCTS = (
    {
        "name": "Smartphone Galaxy",
        "description": "Celular moderno com câmera de alta qualidade",
        "price": "899.99",
        "images": ["https://via.placeholder.com/300x300?text=Smartphone"],
        "category": "Eletrônicos",
        "purchase_link": _WHATSAPP + "smartphone",
    },
    {
        "name": "Notebook Dell",
        "description": "Laptop para trabalho e estudos",
        "price": "1299.99",
        "images": ["https://via.placeholder.com/300x300?text=Notebook"],
        "category": "Eletrônicos",
        "purchase_link": _WHATSAPP + "notebook",
    },
    {
        "name": "Camiseta Básica",
        "description": "Camiseta 100% algodão, várias cores",
        "price": "29.99",
        "images": ["https://via.placeholder.com/300x300?text=Camiseta"],
        "category": "Roupas",
        "purchase_link": _WHATSAPP + "camiseta",
    },
    {
        "name": "Calça Jeans",
        "description": "Calça jeans azul tradicional",
        "price": "89.99",
        "images": ["https://via.placeholder.com/300x300?text=Calca"],
        "category": "Roupas",
        "purchase_link": _WHATSAPP + "calca",
    },
    {
        "name": "Vaso Decorativo",
        "description": "Vaso de cerâmica para plantas",
        "price": "45.99",
        "images": ["https://via.placeholder.com/300x300?text=Vaso"],
        "category": "Casa e Jardim",
        "purchase_link": _WHATSAPP + "vaso",
    },
    {
        "name": "Kit Jardinagem",
        "description": "Ferramentas básicas para jardinagem",
        "price": "79.99",
        "images": ["https://via.placeholder.com/300x300?text=Kit"],
        "category": "Casa e Jardim",
        "purchase_link": _WHATSAPP + "kit",
    },
)


def seed_admin(storage: Storage, username: str, password: str) -> None:
    if not username or not password:
        logger.warning("admin credentials not configured; skipping admin seed")
        return
    if storage.get_user_by_username(username):
        return
    storage.create_user(username, password)
    logger.info("seeded admin user %s", username)


def seed_catalog(storage: Storage) -> None:
    """Load the demo catalog unless the store already holds categories."""
    if storage.list_categories():
        return
    ids = {name: storage.create_category(name).id for name in DEMO_CATEGORIES}
    for item in DEMO_PRODUCTS:
        fields = {k: v for k, v in item.items() if k != "category"}
        fields["category_id"] = ids[item["category"]]
        fields["is_active"] = True
        storage.create_product(fields)
    logger.info("seeded demo catalog: %d categories, %d products", len(ids), len(DEMO_PRODUCTS))


def seed_storage(storage: Storage, settings: Settings) -> None:
    seed_admin(storage, settings.admin_username, settings.admin_password)
    if settings.seed_demo_data:
        seed_catalog(storage)
