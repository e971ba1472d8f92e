"""Read-only queries over the catalog: search, low stock and sales reports."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from grso_pos.models.catalog import CatalogState, Product
from grso_pos.models.inventory import LowStockVariant
from grso_pos.models.reports import (
    CategorySalesLine,
    DashboardSummary,
    ProductSalesLine,
    SalesReport,
)
from grso_pos.models.sales import Transaction


def _money(value: float) -> Decimal:
    return Decimal(str(value))


def search_products(products: Iterable[Product], search: str | None = None) -> list[Product]:
    """Products whose name or category contains ``search``, sorted by name."""

    term = (search or "").strip().lower()
    matches = [
        product
        for product in products
        if term in product.name.lower() or term in product.category.lower()
    ]
    return sorted(matches, key=lambda product: product.name.lower())


def low_stock_variants(products: Iterable[Product]) -> list[LowStockVariant]:
    return [
        LowStockVariant(
            product_id=product.id,
            product_name=product.name,
            size=variant.size,
            stock=variant.stock,
            low_stock_threshold=variant.low_stock_threshold,
            out_of_stock=variant.is_out_of_stock,
        )
        for product in products
        for variant in product.variants
        if variant.is_low_stock
    ]


def _transaction_matches(transaction: Transaction, term: str) -> bool:
    return (
        term in transaction.id.lower()
        or term in transaction.payment_method.value.lower()
        or any(term in item.product_name.lower() for item in transaction.items)
    )


def filter_transactions(
    transactions: Iterable[Transaction],
    start_date: date | None = None,
    end_date: date | None = None,
    search: str | None = None,
) -> list[Transaction]:
    """Filter by inclusive local-day bounds and free text, newest first."""

    term = (search or "").strip().lower()
    selected = []
    for transaction in transactions:
        day = transaction.date.astimezone().date()
        if start_date and day < start_date:
            continue
        if end_date and day > end_date:
            continue
        if term and not _transaction_matches(transaction, term):
            continue
        selected.append(transaction)
    return sorted(selected, key=lambda transaction: transaction.date, reverse=True)


def build_sales_report(
    transactions: Sequence[Transaction],
    products: Iterable[Product],
) -> SalesReport:
    """Aggregate revenue per product variant and per category.

    Category totals use the category the product has today; sold items whose
    product was removed from the catalog only count in the variant lines.
    """

    total_revenue = sum((_money(t.total) for t in transactions), Decimal("0"))
    count = len(transactions)
    average = total_revenue / count if count else Decimal("0")

    categories_by_product = {product.id: product.category for product in products}
    product_sales: dict[str, dict] = {}
    category_sales: dict[str, dict] = {}

    for transaction in transactions:
        for item in transaction.items:
            revenue = _money(item.price) * item.quantity

            key = f"{item.product_id}-{item.size}"
            line = product_sales.setdefault(
                key,
                {"id": key, "name": item.product_name, "size": item.size,
                 "quantity": 0, "revenue": Decimal("0")},
            )
            line["quantity"] += item.quantity
            line["revenue"] += revenue

            category = categories_by_product.get(item.product_id)
            if category is None:
                continue
            bucket = category_sales.setdefault(
                category,
                {"category": category, "quantity": 0, "revenue": Decimal("0")},
            )
            bucket["quantity"] += item.quantity
            bucket["revenue"] += revenue

    product_lines = [
        ProductSalesLine(**{**line, "revenue": float(line["revenue"])})
        for line in product_sales.values()
    ]
    category_lines = [
        CategorySalesLine(**{**bucket, "revenue": float(bucket["revenue"])})
        for bucket in category_sales.values()
    ]

    return SalesReport(
        total_revenue=float(total_revenue),
        total_transactions=count,
        average_transaction_value=round(float(average), 2),
        product_sales=sorted(product_lines, key=lambda line: line.quantity, reverse=True),
        category_sales=sorted(category_lines, key=lambda line: line.revenue, reverse=True),
    )


def build_dashboard(state: CatalogState, recent_limit: int = 5) -> DashboardSummary:
    total_revenue = sum((_money(t.total) for t in state.transactions), Decimal("0"))
    return DashboardSummary(
        total_revenue=float(total_revenue),
        product_count=len(state.products),
        low_stock_product_count=sum(
            1
            for product in state.products
            if any(variant.is_low_stock for variant in product.variants)
        ),
        recent_transactions=state.transactions[:recent_limit],
    )
