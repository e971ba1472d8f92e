"""Full backup download and restore routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status

from grso_pos.api.downloads import JSON_MEDIA_TYPE, attachment, dated_filename
from grso_pos.errors import BackupFormatError, PersistenceError
from grso_pos.services.backup import dump_backup, parse_backup
from grso_pos.services.catalog_store import CatalogStoreDependency
from grso_pos.services.users import AdminUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/backup", tags=["backup"])


@router.get("", summary="Download products, transactions and categories as JSON")
async def download_backup(store: CatalogStoreDependency, user: AdminUser):
    return attachment(
        dump_backup(store.state),
        dated_filename("grso-pos-backup", "json"),
        JSON_MEDIA_TYPE,
    )


@router.post("/restore", summary="Replace the whole state with a backup document")
async def restore_backup(
    request: Request,
    store: CatalogStoreDependency,
    user: AdminUser,
) -> dict[str, int | str]:
    """Overwrite every product, transaction and category with the upload.

    An invalid document is rejected and the current state is kept.
    """

    try:
        state = parse_backup(await request.body())
    except BackupFormatError as error:
        logger.warning("Restore rejected: %s", error)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(error),
        ) from error

    try:
        await store.replace_state(state)
    except PersistenceError as error:
        logger.exception("Failed to persist restored state")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog storage unavailable",
        ) from error

    return {
        "status": "restored",
        "products": len(state.products),
        "transactions": len(state.transactions),
        "categories": len(state.categories),
    }
