"""Checkout and transaction history routes."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from grso_pos.api.downloads import CSV_MEDIA_TYPE, attachment, dated_filename
from grso_pos.errors import CatalogValidationError, PersistenceError
from grso_pos.models.sales import CheckoutRequest, Transaction
from grso_pos.services.catalog_store import CatalogStoreDependency
from grso_pos.services.reports import filter_transactions
from grso_pos.services.sales_csv import export_transactions_csv
from grso_pos.services.users import CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post(
    "",
    response_model=Transaction,
    status_code=status.HTTP_201_CREATED,
    summary="Complete a sale and decrement stock",
)
async def checkout(
    payload: CheckoutRequest,
    store: CatalogStoreDependency,
    user: CurrentUser,
) -> Transaction:
    """Record the sale for the calling seller.

    The cart is held by the client, so the name and price on each line are
    recorded as sent and are not checked against the current catalog. Only
    stock is taken from the server.
    """

    try:
        transaction = await store.complete_transaction(
            payload.cart, payload.payment_method, user.id
        )
    except CatalogValidationError as error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(error),
        ) from error
    except PersistenceError as error:
        logger.exception("Failed to persist transaction")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog storage unavailable",
        ) from error

    logger.info(
        "[checkout]",
        extra={
            "transaction_id": transaction.id,
            "seller_id": user.id,
            "total": transaction.total,
        },
    )
    return transaction


@router.get("", response_model=list[Transaction])
async def list_transactions(
    store: CatalogStoreDependency,
    user: CurrentUser,
    start_date: date | None = Query(None, description="First day included"),
    end_date: date | None = Query(None, description="Last day included"),
    search: str | None = Query(None, description="Match on id, payment method or item"),
) -> list[Transaction]:
    return filter_transactions(store.transactions, start_date, end_date, search)


@router.get("/export", summary="Download the filtered transactions as CSV")
async def export_transactions(
    store: CatalogStoreDependency,
    user: CurrentUser,
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    search: str | None = Query(None),
):
    transactions = filter_transactions(store.transactions, start_date, end_date, search)
    if not transactions:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No transactions to export for the selected filters",
        )
    return attachment(
        export_transactions_csv(transactions),
        dated_filename("transactions", "csv"),
        CSV_MEDIA_TYPE,
    )
