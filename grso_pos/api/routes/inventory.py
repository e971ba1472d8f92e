"""Inventory CSV export and bulk import routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Request, status

from grso_pos.api.downloads import CSV_MEDIA_TYPE, attachment, dated_filename
from grso_pos.errors import CsvImportError, PersistenceError
from grso_pos.models.inventory import ImportResult
from grso_pos.services.catalog_store import CatalogStoreDependency
from grso_pos.services.inventory_csv import (
    decode_inventory_bytes,
    export_inventory_csv,
    parse_inventory_csv,
)
from grso_pos.services.reports import search_products
from grso_pos.services.users import AdminUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("/export", summary="Download the inventory as a CSV file")
async def export_inventory(
    store: CatalogStoreDependency,
    user: AdminUser,
    search: str | None = Query(None, description="Only export matching products"),
):
    products = search_products(store.products, search)
    if not products:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No products to export for the selected filters",
        )
    return attachment(
        export_inventory_csv(products),
        dated_filename("inventaire", "csv"),
        CSV_MEDIA_TYPE,
    )


@router.post(
    "/import",
    response_model=ImportResult,
    summary="Add or update products from an inventory CSV file",
)
async def import_inventory(
    request: Request,
    store: CatalogStoreDependency,
    user: AdminUser,
) -> ImportResult:
    """Merge the uploaded CSV into the catalog.

    The whole file is validated first; a missing header or a single bad row
    rejects the import and leaves the catalog unchanged.
    """

    body = await request.body()
    try:
        rows = parse_inventory_csv(decode_inventory_bytes(body))
    except CsvImportError as error:
        logger.warning("Inventory import rejected: %s", error)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(error),
        ) from error

    try:
        state = await store.bulk_add_or_update_products(rows)
    except PersistenceError as error:
        logger.exception("Failed to persist inventory import")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog storage unavailable",
        ) from error

    logger.info(
        "Inventory import applied",
        extra={"rows": len(rows), "products": len(state.products)},
    )
    return ImportResult(
        imported=len(rows),
        product_count=len(state.products),
        category_count=len(state.categories),
    )
