"""Cart to transaction conversion and stock reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel

from grso_pos.errors import EmptyCartError
from grso_pos.models.catalog import Product
from grso_pos.models.sales import (
    CartItem,
    CartTotals,
    PaymentMethod,
    Transaction,
    TransactionItem,
)
from grso_pos.services.engine.ids import generate_id

logger = logging.getLogger(__name__)

TAX_RATE = Decimal("0.20")
_CENTS = Decimal("0.01")

VariantKey = tuple[str, str]


class CheckoutResult(BaseModel):
    """The new transaction and the product list with stock decremented."""

    transaction: Transaction
    products: list[Product]


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def compute_totals(cart: Sequence[CartItem]) -> CartTotals:
    """Return subtotal, 20% tax rounded to cents, and total for the cart."""

    subtotal = sum(
        (_to_decimal(line.price) * line.quantity for line in cart),
        Decimal("0"),
    )
    tax = (subtotal * TAX_RATE).quantize(_CENTS, rounding=ROUND_HALF_UP)
    total = subtotal + tax
    return CartTotals(subtotal=float(subtotal), tax=float(tax), total=float(total))


def _sold_quantities(cart: Sequence[CartItem]) -> dict[VariantKey, int]:
    sold: dict[VariantKey, int] = {}
    for line in cart:
        key = (line.product_id, line.size)
        sold[key] = sold.get(key, 0) + line.quantity
    return sold


def _reconcile_product(
    product: Product,
    sold: dict[VariantKey, int],
    applied: set[VariantKey],
) -> Product:
    if not any(key[0] == product.id for key in sold):
        return product

    variants = []
    for variant in product.variants:
        key = (product.id, variant.size)
        quantity = sold.get(key)
        if quantity is None:
            variants.append(variant)
            continue

        applied.add(key)
        new_stock = variant.stock - quantity
        if new_stock < 0:
            logger.warning(
                "Clamping stock of %s (%s) to 0: %d sold, %d on hand",
                product.name,
                variant.size,
                quantity,
                variant.stock,
            )
            new_stock = 0
        variants.append(variant.model_copy(update={"stock": new_stock}))

    return product.model_copy(update={"variants": variants})


def commit_transaction(
    products: Sequence[Product],
    cart: Sequence[CartItem],
    payment_method: PaymentMethod,
    seller_id: int,
    *,
    now: datetime | None = None,
) -> CheckoutResult:
    """Turn a cart into a transaction and decrement the stock it sold.

    Stock is not re-validated against the live catalog: the cart is trusted,
    and a variant whose stock would go negative is clamped to zero instead.
    Lines pointing at products or sizes that no longer exist are still
    recorded in the transaction.
    """

    if not cart:
        raise EmptyCartError()

    totals = compute_totals(cart)
    transaction = Transaction(
        id=generate_id("trans"),
        date=now or datetime.now(UTC),
        items=[
            TransactionItem(
                product_id=line.product_id,
                product_name=line.name,
                size=line.size,
                quantity=line.quantity,
                price=line.price,
            )
            for line in cart
        ],
        total=totals.total,
        tax=totals.tax,
        payment_method=payment_method,
        seller_id=seller_id,
    )

    sold = _sold_quantities(cart)
    applied: set[VariantKey] = set()
    reconciled = [_reconcile_product(product, sold, applied) for product in products]

    for product_id, size in sold.keys() - applied:
        logger.warning(
            "Sold variant %s (%s) is no longer in the catalog; stock untouched",
            product_id,
            size,
        )

    return CheckoutResult(transaction=transaction, products=reconciled)
