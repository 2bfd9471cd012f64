"""Relational storage backend built on SQLAlchemy."""
from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import delete, exists, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.core.errors import DuplicateUsernameError
from storefront.core.security import hash_password
from storefront.db import models
from storefront.db.session import Base, make_sessionmaker
from storefront.domain.entities import (
    CATEGORY_FIELDS,
    PRODUCT_FIELDS,
    Category,
    Product,
    ProductWithCategory,
    User,
    as_utc,
    sort_categories,
)
from storefront.repositories.base import Storage, new_product


def _user(row: models.User) -> User:
    return User(id=row.id, username=row.username, password_hash=row.password)


def _category(row: models.Category) -> Category:
    return Category(id=row.id, name=row.name, created_at=as_utc(row.created_at))


def _product(row: models.Product) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        description=row.description,
        price=row.price,
        images=tuple(row.images or ()),
        category_id=row.category_id,
        purchase_link=row.purchase_link,
        terms=row.terms,
        is_active=bool(row.is_active),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SQLStorage(Storage):
    """CRUD over the users/categories/products tables.

    Returned values are detached domain records, never ORM rows.
    """

    def __init__(self, engine: Engine, **kwargs) -> None:
        super().__init__(**kwargs)
        self.engine = engine
        self._sessionmaker = make_sessionmaker(engine)

    def create_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session: Session = self._sessionmaker()
        try:
            yield session
        finally:
            session.close()

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        with self._session() as session:
            row = session.get(models.User, user_id)
            return _user(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as session:
            stmt = select(models.User).where(models.User.username == username)
            row = session.execute(stmt).scalar_one_or_none()
            return _user(row) if row else None

    def create_user(self, username: str, password: str) -> User:
        if self.get_user_by_username(username):
            raise DuplicateUsernameError()
        row = models.User(id=str(uuid.uuid4()), username=username, password=hash_password(password))
        with self._session() as session:
            session.add(row)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateUsernameError() from exc
            return _user(row)

    # -------------------------- categories --------------------------
    def list_categories(self) -> list[Category]:
        with self._session() as session:
            rows = session.execute(select(models.Category)).scalars().all()
            return sort_categories(_category(row) for row in rows)

    def get_category(self, category_id: str) -> Optional[Category]:
        with self._session() as session:
            row = session.get(models.Category, category_id)
            return _category(row) if row else None

    def create_category(self, name: str) -> Category:
        row = models.Category(id=str(uuid.uuid4()), name=name, created_at=self._clock())
        with self._session() as session:
            session.add(row)
            session.commit()
            return _category(row)

    def update_category(self, category_id: str, fields: dict) -> Optional[Category]:
        with self._session() as session:
            row = session.get(models.Category, category_id)
            if not row:
                return None
            for key, value in fields.items():
                if key in CATEGORY_FIELDS:
                    setattr(row, key, value)
            session.commit()
            return _category(row)

    def delete_category(self, category_id: str) -> bool:
        # Reference check and delete share one transaction.
        with self._session() as session, session.begin():
            in_use = session.execute(
                select(exists().where(models.Product.category_id == category_id))
            ).scalar()
            if in_use:
                return False
            result = session.execute(delete(models.Category).where(models.Category.id == category_id))
            return (result.rowcount or 0) > 0

    # -------------------------- products --------------------------
    def list_products(self) -> list[ProductWithCategory]:
        stmt = (
            select(models.Product, models.Category.name)
            .outerjoin(models.Category, models.Product.category_id == models.Category.id)
            .order_by(models.Product.created_at.desc())
        )
        with self._session() as session:
            return [
                ProductWithCategory.from_product(_product(row), category_name)
                for row, category_name in session.execute(stmt).all()
            ]

    def get_product(self, product_id: str) -> Optional[Product]:
        with self._session() as session:
            row = session.get(models.Product, product_id)
            return _product(row) if row else None

    def create_product(self, fields: dict) -> Product:
        product = new_product(str(uuid.uuid4()), fields, self._clock())
        row = models.Product(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            images=list(product.images),
            category_id=product.category_id,
            purchase_link=product.purchase_link,
            terms=product.terms,
            is_active=product.is_active,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
        with self._session() as session:
            session.add(row)
            session.commit()
        return product

    def update_product(self, product_id: str, fields: dict) -> Optional[Product]:
        with self._session() as session:
            row = session.get(models.Product, product_id)
            if not row:
                return None
            for key, value in fields.items():
                if key not in PRODUCT_FIELDS:
                    continue
                if key == "images":
                    value = list(value or ())
                elif key == "price":
                    value = str(value)
                setattr(row, key, value)
            row.updated_at = self._clock()
            session.commit()
            return _product(row)

    def delete_product(self, product_id: str) -> bool:
        with self._session() as session:
            result = session.execute(delete(models.Product).where(models.Product.id == product_id))
            session.commit()
            return (result.rowcount or 0) > 0
