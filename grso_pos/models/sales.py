"""Cart, transaction and checkout schemas."""

from __future__ import annotations

import enum
from datetime import UTC, datetime

from pydantic import Field, field_validator

from grso_pos.models.base import PosModel


class PaymentMethod(str, enum.Enum):
    CASH = "Espèces"
    CARD = "Carte"
    CHEQUE = "Chèque"


class CartItem(PosModel):
    """A cart line with the product data captured when it was added."""

    product_id: str
    name: str
    price: float = Field(..., ge=0)
    size: str
    stock: int = Field(..., description="Variant stock at the time the line was added")
    quantity: int = Field(default=1, ge=1)


class TransactionItem(PosModel):
    """Point-in-time copy of a sold cart line.

    Historical transactions keep the name and price they were sold with, even
    if the product is later renamed, repriced or removed.
    """

    product_id: str
    product_name: str
    size: str
    quantity: int
    price: float


class Transaction(PosModel):
    """Immutable record of a completed sale."""

    id: str
    date: datetime
    items: list[TransactionItem]
    total: float
    tax: float
    payment_method: PaymentMethod
    seller_id: int

    @field_validator("date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps from older backups are read as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @property
    def subtotal(self) -> float:
        return round(self.total - self.tax, 2)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)


class CartTotals(PosModel):
    subtotal: float
    tax: float
    total: float


class CartAddRequest(PosModel):
    """Request body for POST /cart/add."""

    cart: list[CartItem] = Field(default_factory=list)
    product_id: str
    size: str


class CartQuantityRequest(PosModel):
    """Request body for POST /cart/quantity."""

    cart: list[CartItem] = Field(default_factory=list)
    product_id: str
    size: str
    delta: int


class CartRemoveRequest(PosModel):
    """Request body for POST /cart/remove."""

    cart: list[CartItem] = Field(default_factory=list)
    product_id: str
    size: str


class CartSummaryRequest(PosModel):
    cart: list[CartItem] = Field(default_factory=list)


class CartResponse(PosModel):
    """Updated cart returned by every cart operation."""

    items: list[CartItem]
    totals: CartTotals


class CheckoutRequest(PosModel):
    """Request body for POST /transactions."""

    cart: list[CartItem] = Field(..., min_length=1)
    payment_method: PaymentMethod = PaymentMethod.CARD
