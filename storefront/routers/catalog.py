"""Admin catalog endpoints; every route requires a valid session."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from storefront.routers.deps import get_catalog_service, require_auth
from storefront.routers.schemas import (
    CategoryIn,
    CategoryPatch,
    ProductIn,
    ProductPatch,
    category_json,
    product_json,
)
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/api", tags=["admin"], dependencies=[Depends(require_auth)])


# ---------------------- categories ----------------------
@router.get("/categories")
def list_categories(catalog: CatalogService = Depends(get_catalog_service)):
    return [category_json(c) for c in catalog.categories()]


@router.post("/categories", status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryIn, catalog: CatalogService = Depends(get_catalog_service)):
    return category_json(catalog.create_category(payload.name))


@router.patch("/categories/{category_id}")
def update_category(category_id: str, payload: CategoryPatch, catalog: CatalogService = Depends(get_catalog_service)):
    return category_json(catalog.rename_category(category_id, payload.model_dump(exclude_unset=True)))


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: str, catalog: CatalogService = Depends(get_catalog_service)):
    catalog.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------- products ----------------------
@router.get("/products")
def list_products(catalog: CatalogService = Depends(get_catalog_service)):
    return [product_json(p) for p in catalog.products()]


@router.get("/products/{product_id}")
def get_product(product_id: str, catalog: CatalogService = Depends(get_catalog_service)):
    return product_json(catalog.product(product_id))


@router.post("/products", status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductIn, catalog: CatalogService = Depends(get_catalog_service)):
    return product_json(catalog.create_product(payload.to_fields()))


@router.patch("/products/{product_id}")
def update_product(product_id: str, payload: ProductPatch, catalog: CatalogService = Depends(get_catalog_service)):
    return product_json(catalog.update_product(product_id, payload.to_fields()))


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: str, catalog: CatalogService = Depends(get_catalog_service)):
    catalog.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
