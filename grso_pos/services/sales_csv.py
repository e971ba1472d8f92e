"""CSV exports for the transaction history and the sales report."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable

from grso_pos.models.reports import ProductSalesLine
from grso_pos.models.sales import Transaction
from grso_pos.services.inventory_csv import UTF8_BOM, format_amount

TRANSACTION_HEADERS = [
    "ID Transaction",
    "Date",
    "Articles",
    "Quantité Totale",
    "Montant Total",
    "Méthode de Paiement",
    "Vendeur ID",
]
SALES_REPORT_HEADERS = ["Produit", "Taille", "Quantité Vendue", "Revenu Total"]

DISPLAY_DATE_FORMAT = "%d/%m/%Y %H:%M:%S"


def format_items(transaction: Transaction) -> str:
    return ", ".join(f"{item.quantity} x {item.product_name}" for item in transaction.items)


def export_transactions_csv(transactions: Iterable[Transaction]) -> str:
    """One row per transaction; text cells are quoted, counts are not."""

    buffer = io.StringIO()
    csv.writer(buffer, delimiter=";", lineterminator="\n").writerow(TRANSACTION_HEADERS)
    writer = csv.writer(
        buffer,
        delimiter=";",
        lineterminator="\n",
        quoting=csv.QUOTE_NONNUMERIC,
    )
    for transaction in transactions:
        writer.writerow(
            [
                transaction.id,
                transaction.date.astimezone().strftime(DISPLAY_DATE_FORMAT),
                format_items(transaction),
                transaction.total_quantity,
                format_amount(transaction.total),
                transaction.payment_method.value,
                transaction.seller_id,
            ]
        )
    return UTF8_BOM + buffer.getvalue()


def export_sales_report_csv(lines: Iterable[ProductSalesLine]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=";", lineterminator="\n")
    writer.writerow(SALES_REPORT_HEADERS)
    for line in lines:
        writer.writerow([line.name, line.size, line.quantity, format_amount(line.revenue)])
    return UTF8_BOM + buffer.getvalue()
