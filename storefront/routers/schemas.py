"""Request models and JSON shaping for the HTTP surface (camelCase on the wire)."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from storefront.domain.entities import Category, Product, ProductWithCategory, User

_email_adapter = TypeAdapter(EmailStr)


def _require_tld(value: str) -> str:
    if len(value.rsplit(".", 1)[-1]) < 2:
        raise ValueError("Invalid email format")
    return value


def normalize_username(value: str) -> str:
    """Validate ``value`` as a login e-mail; raise ValueError when it is not one."""
    try:
        email = _email_adapter.validate_python((value or "").strip())
    except PydanticValidationError as exc:
        raise ValueError("Invalid email format") from exc
    return _require_tld(email)


def normalize_price(value: Union[str, int, float, Decimal]) -> str:
    """Return the canonical decimal string for ``value``; reject anything else."""
    if isinstance(value, bool):
        raise ValueError("Price must be a decimal number")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError("Price must be a decimal number")
    if not number.is_finite() or number < 0:
        raise ValueError("Price must be a non-negative decimal number")
    if number.as_tuple().exponent < -2:
        raise ValueError("Price accepts at most two decimal places")
    # "-0" + 0 is "0"
    return format(number + 0, "f")


class LoginRequest(BaseModel):
    username: EmailStr
    password: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def _tld(cls, value: str) -> str:
        return _require_tld(value)


class CategoryIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class CategoryPatch(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def _strip(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            raise ValueError("Name cannot be null")
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class _ProductFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("price", mode="before", check_fields=False)
    @classmethod
    def _price(cls, value):
        if value is None:
            return value
        return normalize_price(value)

    def to_fields(self) -> dict:
        """Only the fields the client actually sent, in storage names."""
        return self.model_dump(exclude_unset=True)


class ProductIn(_ProductFields):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: str
    images: list[str] = Field(default_factory=list)
    category_id: str = Field(alias="categoryId", min_length=1)
    purchase_link: Optional[str] = Field(default=None, alias="purchaseLink")
    terms: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class ProductPatch(_ProductFields):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[str] = None
    images: Optional[list[str]] = None
    category_id: Optional[str] = Field(default=None, alias="categoryId", min_length=1)
    purchase_link: Optional[str] = Field(default=None, alias="purchaseLink")
    terms: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")

    @model_validator(mode="after")
    def _required_not_null(self):
        for name in ("name", "price", "images", "category_id", "is_active"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


def user_json(user: User) -> dict:
    return {"id": user.id, "username": user.username}


def category_json(category: Category) -> dict:
    return {
        "id": category.id,
        "name": category.name,
        "createdAt": category.created_at.isoformat(),
    }


def product_json(product: Product) -> dict:
    body = {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "images": list(product.images),
        "categoryId": product.category_id,
        "purchaseLink": product.purchase_link,
        "terms": product.terms,
        "isActive": product.is_active,
        "createdAt": product.created_at.isoformat(),
        "updatedAt": product.updated_at.isoformat(),
    }
    if isinstance(product, ProductWithCategory):
        body["categoryName"] = product.category_name
    return body
