"""Public storefront endpoints: no session, active products only."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.routers.deps import get_catalog_service
from storefront.routers.schemas import category_json, product_json
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/store", tags=["store"])


@router.get("/products")
def store_products(catalog: CatalogService = Depends(get_catalog_service)):
    return [product_json(p) for p in catalog.active_products()]


@router.get("/categories")
def store_categories(catalog: CatalogService = Depends(get_catalog_service)):
    return [category_json(c) for c in catalog.categories()]
