"""Pure cart operations used by the point-of-sale screen.

Every function returns a new list and never mutates the cart it receives.
Operations that would break the stock bounds return the cart unchanged
instead of raising.
"""

from __future__ import annotations

from collections.abc import Sequence

from grso_pos.models.catalog import Product, ProductVariant
from grso_pos.models.sales import CartItem


def _find_line(cart: Sequence[CartItem], product_id: str, size: str) -> int | None:
    for index, line in enumerate(cart):
        if line.product_id == product_id and line.size == size:
            return index
    return None


def add_to_cart(
    cart: Sequence[CartItem],
    product: Product,
    variant: ProductVariant,
) -> list[CartItem]:
    """Add one unit of ``variant`` to the cart.

    An existing line is incremented only while its quantity stays within the
    variant's stock. A new line is created only for a variant in stock.
    """

    index = _find_line(cart, product.id, variant.size)
    if index is not None:
        line = cart[index]
        if line.quantity >= variant.stock:
            return list(cart)
        updated = list(cart)
        updated[index] = line.model_copy(update={"quantity": line.quantity + 1})
        return updated

    if variant.stock <= 0:
        return list(cart)

    new_line = CartItem(
        product_id=product.id,
        name=product.name,
        price=product.price,
        size=variant.size,
        stock=variant.stock,
        quantity=1,
    )
    return [*cart, new_line]


def change_quantity(
    cart: Sequence[CartItem],
    product_id: str,
    size: str,
    delta: int,
) -> list[CartItem]:
    """Shift a line's quantity by ``delta``; zero or less drops the line."""

    index = _find_line(cart, product_id, size)
    if index is None:
        return list(cart)

    line = cart[index]
    new_quantity = line.quantity + delta
    if new_quantity <= 0:
        return [item for i, item in enumerate(cart) if i != index]
    if new_quantity > line.stock:
        return list(cart)

    updated = list(cart)
    updated[index] = line.model_copy(update={"quantity": new_quantity})
    return updated


def remove_from_cart(
    cart: Sequence[CartItem],
    product_id: str,
    size: str,
) -> list[CartItem]:
    return [
        line
        for line in cart
        if not (line.product_id == product_id and line.size == size)
    ]
