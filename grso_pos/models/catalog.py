"""Catalog domain models: products, their variants and categories."""

from __future__ import annotations

from pydantic import Field

from grso_pos.models.base import PosModel
from grso_pos.models.sales import Transaction


class ProductVariant(PosModel):
    """A purchasable size of a product, tracked by (product id, size)."""

    size: str
    stock: int = 0
    low_stock_threshold: int = Field(
        default=0,
        description="Advisory level at or below which the variant is flagged",
    )

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.low_stock_threshold

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock == 0


class Product(PosModel):
    """A catalog product. An empty ``id`` marks a product not yet persisted."""

    id: str = ""
    name: str
    category: str = Field(..., description="Free-text category label")
    price: float = Field(..., ge=0)
    variants: list[ProductVariant] = Field(default_factory=list)

    def find_variant(self, size: str) -> ProductVariant | None:
        for variant in self.variants:
            if variant.size == size:
                return variant
        return None


class Category(PosModel):
    id: str
    name: str


class CatalogState(PosModel):
    """Everything the store persists in its durable slot."""

    products: list[Product] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
