"""Stateless cart routes: the client sends its cart and gets the new one back."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import APIRouter, HTTPException, status

from grso_pos.models.sales import (
    CartAddRequest,
    CartItem,
    CartQuantityRequest,
    CartRemoveRequest,
    CartResponse,
    CartSummaryRequest,
)
from grso_pos.services.catalog_store import CatalogStoreDependency
from grso_pos.services.engine.cart import add_to_cart, change_quantity, remove_from_cart
from grso_pos.services.engine.checkout import compute_totals
from grso_pos.services.users import CurrentUser

router = APIRouter(prefix="/cart", tags=["cart"])


def _respond(items: Sequence[CartItem]) -> CartResponse:
    return CartResponse(items=list(items), totals=compute_totals(items))


@router.post("/add", response_model=CartResponse)
async def add_item(
    payload: CartAddRequest,
    store: CatalogStoreDependency,
    user: CurrentUser,
) -> CartResponse:
    """Add one unit of a product variant, within its available stock."""

    product = next((p for p in store.products if p.id == payload.product_id), None)
    variant = product.find_variant(payload.size) if product else None
    if product is None or variant is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Variant {payload.size} of product {payload.product_id} not found",
        )
    return _respond(add_to_cart(payload.cart, product, variant))


@router.post("/quantity", response_model=CartResponse)
async def update_quantity(payload: CartQuantityRequest, user: CurrentUser) -> CartResponse:
    return _respond(
        change_quantity(payload.cart, payload.product_id, payload.size, payload.delta)
    )


@router.post("/remove", response_model=CartResponse)
async def remove_item(payload: CartRemoveRequest, user: CurrentUser) -> CartResponse:
    return _respond(remove_from_cart(payload.cart, payload.product_id, payload.size))


@router.post("/summary", response_model=CartResponse)
async def summarize(payload: CartSummaryRequest, user: CurrentUser) -> CartResponse:
    return _respond(payload.cart)
