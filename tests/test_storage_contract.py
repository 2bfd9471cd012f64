"""
Contract suite shared by the in-memory and SQLite-backed storage.

Every test runs against both backends through the ``storage`` fixture.
"""
from __future__ import annotations

import pytest

from storefront.core.errors import DuplicateUsernameError
from storefront.domain.entities import UNCATEGORIZED, ProductWithCategory
from storefront.repositories.seed import DEMO_CATEGORIES, seed_catalog


def _product_fields(category_id: str, **extra) -> dict:
    fields = {"name": "Luminária", "price": "59.90", "category_id": category_id}
    fields.update(extra)
    return fields


# -------------------------- users --------------------------
def test_create_user_then_validate_credentials(storage):
    user = storage.create_user("ana@loja.test", "segredo123")

    assert user.username == "ana@loja.test"
    assert user.password_hash != "segredo123"
    assert storage.get_user(user.id) == user
    assert storage.get_user_by_username("ana@loja.test") == user
    assert storage.validate_credentials("ana@loja.test", "segredo123") == user
    assert storage.validate_credentials("ana@loja.test", "errada") is None


def test_validate_credentials_unknown_user_is_none(storage):
    assert storage.validate_credentials("ninguem@loja.test", "x") is None


def test_username_lookup_is_case_sensitive(storage):
    storage.create_user("ana@loja.test", "segredo123")
    assert storage.get_user_by_username("ANA@loja.test") is None


def test_duplicate_username_rejected_without_mutation(storage):
    original = storage.create_user("ana@loja.test", "primeira")

    with pytest.raises(DuplicateUsernameError):
        storage.create_user("ana@loja.test", "segunda")

    assert storage.get_user_by_username("ana@loja.test") == original
    assert storage.validate_credentials("ana@loja.test", "primeira") == original
    assert storage.validate_credentials("ana@loja.test", "segunda") is None


def test_missing_user_is_none(storage):
    assert storage.get_user("does-not-exist") is None


# -------------------------- categories --------------------------
def test_categories_sorted_by_name_ignoring_accents_and_case(storage):
    for name in ("roupas", "Eletrônicos", "Áudio", "Casa e Jardim"):
        storage.create_category(name)

    names = [c.name for c in storage.list_categories()]

    assert names == ["Áudio", "Casa e Jardim", "Eletrônicos", "roupas"]


def test_duplicate_category_names_coexist(storage):
    first = storage.create_category("Roupas")
    second = storage.create_category("Roupas")

    assert first.id != second.id
    assert len(storage.list_categories()) == 2


def test_update_category(storage):
    category = storage.create_category("Roupa")

    updated = storage.update_category(category.id, {"name": "Roupas"})

    assert updated.id == category.id
    assert updated.name == "Roupas"
    assert updated.created_at == category.created_at
    assert storage.get_category(category.id) == updated
    assert storage.update_category("missing", {"name": "x"}) is None


def test_delete_category_guarded_by_products(storage):
    category = storage.create_category("Eletrônicos")
    other = storage.create_category("Outros")
    product = storage.create_product(_product_fields(category.id))

    assert storage.delete_category(category.id) is False
    assert category.id in [c.id for c in storage.list_categories()]

    storage.update_product(product.id, {"category_id": other.id})
    assert storage.delete_category(category.id) is True
    assert category.id not in [c.id for c in storage.list_categories()]

    assert storage.delete_category(other.id) is False
    storage.delete_product(product.id)
    assert storage.delete_category(other.id) is True


def test_delete_missing_category_is_false(storage):
    assert storage.delete_category("missing") is False


# -------------------------- products --------------------------
def test_create_product_applies_defaults(storage):
    category = storage.create_category("Casa")

    product = storage.create_product(_product_fields(category.id))

    assert product.id
    assert product.is_active is True
    assert product.images == ()
    assert product.description is None
    assert product.purchase_link is None
    assert product.terms is None
    assert product.created_at == product.updated_at
    assert storage.get_product(product.id) == product


def test_create_product_round_trip_keeps_all_fields(storage):
    category = storage.create_category("Casa")
    fields = _product_fields(
        category.id,
        description="Luz quente",
        images=["https://img.test/1.png", "data:image/png;base64,AAAA"],
        purchase_link="https://wa.me/5511999999999?text=Quero",
        terms="Troca em 7 dias",
        is_active=False,
    )

    created = storage.create_product(fields)
    fetched = storage.get_product(created.id)

    assert fetched == created
    assert fetched.name == "Luminária"
    assert fetched.price == "59.90"
    assert fetched.images == ("https://img.test/1.png", "data:image/png;base64,AAAA")
    assert fetched.category_id == category.id
    assert fetched.terms == "Troca em 7 dias"
    assert fetched.is_active is False


def test_update_product_is_partial_and_refreshes_updated_at(storage):
    category = storage.create_category("Casa")
    product = storage.create_product(_product_fields(category.id, description="Original"))

    updated = storage.update_product(product.id, {"price": "49.90"})

    assert updated.price == "49.90"
    assert updated.name == product.name
    assert updated.description == "Original"
    assert updated.created_at == product.created_at
    assert updated.updated_at > product.updated_at
    assert storage.get_product(product.id) == updated


def test_update_product_can_clear_optional_field(storage):
    category = storage.create_category("Casa")
    product = storage.create_product(_product_fields(category.id, terms="Sem troca"))

    updated = storage.update_product(product.id, {"terms": None, "unknown": "ignored"})

    assert updated.terms is None
    assert not hasattr(updated, "unknown")


def test_update_missing_product_is_none(storage):
    assert storage.update_product("missing", {"name": "x"}) is None


def test_delete_product(storage):
    category = storage.create_category("Casa")
    product = storage.create_product(_product_fields(category.id))

    assert storage.delete_product(product.id) is True
    assert storage.get_product(product.id) is None
    assert storage.delete_product(product.id) is False


def test_list_products_newest_first_with_category_name(storage):
    category = storage.create_category("Casa")
    older = storage.create_product(_product_fields(category.id, name="Antigo"))
    newer = storage.create_product(_product_fields(category.id, name="Novo"))

    rows = storage.list_products()

    assert [r.id for r in rows] == [newer.id, older.id]
    assert all(isinstance(r, ProductWithCategory) for r in rows)
    assert {r.category_name for r in rows} == {"Casa"}


def test_list_products_dangling_category_uses_sentinel(storage):
    storage.create_product(_product_fields("no-such-category"))

    (row,) = storage.list_products()

    assert row.category_name == UNCATEGORIZED


# -------------------------- seed --------------------------
def test_seed_catalog(storage):
    seed_catalog(storage)

    assert [c.name for c in storage.list_categories()] == list(DEMO_CATEGORIES)
    products = storage.list_products()
    assert len(products) == 6
    assert all(p.is_active for p in products)
    assert {p.category_name for p in products} == set(DEMO_CATEGORIES)


def test_seed_catalog_is_skipped_when_catalog_exists(storage):
    storage.create_category("Própria")
    seed_catalog(storage)
    assert [c.name for c in storage.list_categories()] == ["Própria"]
