"""
Catalog use cases for the admin back office and the public store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront.core.errors import CategoryInUseError, NotFoundError, ValidationError
from storefront.domain.entities import Category, Product, ProductWithCategory
from storefront.repositories.base import Storage

logger = logging.getLogger(__name__)


@dataclass
class CatalogService:
    storage: Storage

    # -------------------------- categories --------------------------
    def categories(self) -> list[Category]:
        return self.storage.list_categories()

    def create_category(self, name: str) -> Category:
        category = self.storage.create_category(name)
        logger.info("category created %s (%s)", category.id, category.name)
        return category

    def rename_category(self, category_id: str, fields: dict) -> Category:
        category = self.storage.update_category(category_id, fields)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def delete_category(self, category_id: str) -> None:
        if self.storage.get_category(category_id) is None:
            raise NotFoundError("Category not found")
        if not self.storage.delete_category(category_id):
            raise CategoryInUseError()
        logger.info("category deleted %s", category_id)

    # -------------------------- products --------------------------
    def products(self) -> list[ProductWithCategory]:
        return self.storage.list_products()

    def active_products(self) -> list[ProductWithCategory]:
        return [p for p in self.storage.list_products() if p.is_active]

    def product(self, product_id: str) -> Product:
        product = self.storage.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def _require_category(self, category_id: str) -> None:
        if self.storage.get_category(category_id) is None:
            raise ValidationError(
                "Invalid input",
                details=[{"loc": ["body", "categoryId"], "msg": "Category not found", "type": "value_error"}],
            )

    def create_product(self, fields: dict) -> Product:
        self._require_category(fields["category_id"])
        product = self.storage.create_product(fields)
        logger.info("product created %s (%s)", product.id, product.name)
        return product

    def update_product(self, product_id: str, fields: dict) -> Product:
        if "category_id" in fields:
            self._require_category(fields["category_id"])
        product = self.storage.update_product(product_id, fields)
        if not product:
            raise NotFoundError("Product not found")
        logger.info("product updated %s", product_id)
        return product

    def delete_product(self, product_id: str) -> None:
        if not self.storage.delete_product(product_id):
            raise NotFoundError("Product not found")
        logger.info("product deleted %s", product_id)
