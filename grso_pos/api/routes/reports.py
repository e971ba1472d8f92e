"""Sales report and dashboard routes."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from grso_pos.api.downloads import CSV_MEDIA_TYPE, attachment, dated_filename
from grso_pos.config import settings
from grso_pos.models.reports import DashboardSummary, SalesReport
from grso_pos.services.catalog_store import CatalogStoreDependency
from grso_pos.services.reports import (
    build_dashboard,
    build_sales_report,
    filter_transactions,
)
from grso_pos.services.sales_csv import export_sales_report_csv
from grso_pos.services.users import CurrentUser

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/sales", response_model=SalesReport)
async def sales_report(
    store: CatalogStoreDependency,
    user: CurrentUser,
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
) -> SalesReport:
    transactions = filter_transactions(store.transactions, start_date, end_date)
    return build_sales_report(transactions, store.products)


@router.get("/sales/export", summary="Download the per-variant sales report as CSV")
async def export_sales_report(
    store: CatalogStoreDependency,
    user: CurrentUser,
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    transactions = filter_transactions(store.transactions, start_date, end_date)
    report = build_sales_report(transactions, store.products)
    if not report.product_sales:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No sales data to export for the selected period",
        )
    return attachment(
        export_sales_report_csv(report.product_sales),
        dated_filename("rapport-ventes", "csv"),
        CSV_MEDIA_TYPE,
    )


@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard(store: CatalogStoreDependency, user: CurrentUser) -> DashboardSummary:
    return build_dashboard(store.state, settings.RECENT_TRANSACTIONS_LIMIT)
