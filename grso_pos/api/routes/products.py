"""Routes for browsing and editing the product catalog."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from grso_pos.errors import PersistenceError, ProductNotFoundError
from grso_pos.models.catalog import Category, Product, ProductVariant
from grso_pos.models.inventory import LowStockVariant, ProductPayload
from grso_pos.services.catalog_store import CatalogStoreDependency
from grso_pos.services.reports import low_stock_variants, search_products
from grso_pos.services.users import AdminUser, CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


def _to_product(payload: ProductPayload, product_id: str = "") -> Product:
    return Product(
        id=product_id,
        name=payload.name,
        category=payload.category,
        price=payload.price,
        variants=[ProductVariant(**variant.model_dump()) for variant in payload.variants],
    )


@router.get("", response_model=list[Product])
async def list_products(
    store: CatalogStoreDependency,
    user: CurrentUser,
    search: str | None = Query(None, description="Match on name or category"),
) -> list[Product]:
    return search_products(store.products, search)


@router.get("/low-stock", response_model=list[LowStockVariant])
async def list_low_stock(store: CatalogStoreDependency, user: CurrentUser) -> list[LowStockVariant]:
    """Variants whose stock is at or below their low-stock threshold."""

    return low_stock_variants(store.products)


@router.get("/categories", response_model=list[Category])
async def list_categories(store: CatalogStoreDependency, user: CurrentUser) -> list[Category]:
    return store.categories


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    store: CatalogStoreDependency,
    user: CurrentUser,
) -> Product:
    for product in store.products:
        if product.id == product_id:
            return product
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Product {product_id} not found",
    )


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product, adding its category if it is new",
)
async def create_product(
    payload: ProductPayload,
    store: CatalogStoreDependency,
    user: AdminUser,
) -> Product:
    logger.debug("Received product payload: %s", payload.model_dump_json())
    try:
        return await store.add_product(_to_product(payload))
    except PersistenceError as error:
        logger.exception("Failed to persist new product %s", payload.name)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog storage unavailable",
        ) from error


@router.put(
    "/{product_id}",
    response_model=Product,
    summary="Replace a product and its whole variant list",
)
async def update_product(
    product_id: str,
    payload: ProductPayload,
    store: CatalogStoreDependency,
    user: AdminUser,
) -> Product:
    try:
        return await store.update_product(_to_product(payload, product_id))
    except ProductNotFoundError as error:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(error),
        ) from error
    except PersistenceError as error:
        logger.exception("Failed to persist product %s", product_id)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog storage unavailable",
        ) from error
