"""Schemas returned by the reporting endpoints."""

from __future__ import annotations

from pydantic import Field

from grso_pos.models.base import PosModel
from grso_pos.models.sales import Transaction


class ProductSalesLine(PosModel):
    """Quantity and revenue sold for one (product, size) pair."""

    id: str = Field(..., description="'<productId>-<size>' aggregation key")
    name: str
    size: str
    quantity: int
    revenue: float


class CategorySalesLine(PosModel):
    category: str
    quantity: int
    revenue: float


class SalesReport(PosModel):
    total_revenue: float
    total_transactions: int
    average_transaction_value: float
    product_sales: list[ProductSalesLine] = Field(default_factory=list)
    category_sales: list[CategorySalesLine] = Field(default_factory=list)


class DashboardSummary(PosModel):
    total_revenue: float
    product_count: int
    low_stock_product_count: int
    recent_transactions: list[Transaction] = Field(default_factory=list)
