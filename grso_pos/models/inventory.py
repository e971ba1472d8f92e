"""Schemas used by the inventory API and the bulk CSV import."""

from __future__ import annotations

from pydantic import Field, field_validator

from grso_pos.models.base import PosModel


class ImportRow(PosModel):
    """One product/variant pairing read from an inventory CSV file."""

    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    size: str = "N/A"
    stock: int = Field(default=0, ge=0)
    low_stock_threshold: int = Field(default=0, ge=0)


class ImportResult(PosModel):
    """Summary returned once an import has been merged into the catalog."""

    imported: int = Field(..., ge=0, description="Number of variant rows applied")
    product_count: int
    category_count: int


class VariantPayload(PosModel):
    size: str
    stock: int = Field(default=0, ge=0)
    low_stock_threshold: int = Field(default=0, ge=0)

    @field_validator("size")
    @classmethod
    def _size_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Every variant needs a size (use 'N/A' when not applicable)")
        return value


class ProductPayload(PosModel):
    """Incoming product sent by the inventory editor on create or update."""

    name: str
    category: str
    price: float = Field(..., gt=0)
    variants: list[VariantPayload] = Field(..., min_length=1)

    @field_validator("name", "category")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name and category are required")
        return value

    @field_validator("variants")
    @classmethod
    def _unique_sizes(cls, values: list[VariantPayload]) -> list[VariantPayload]:
        sizes = [variant.size for variant in values]
        if len(set(sizes)) != len(sizes):
            raise ValueError("Variant sizes must be unique within a product")
        return values


class LowStockVariant(PosModel):
    product_id: str
    product_name: str
    size: str
    stock: int
    low_stock_threshold: int
    out_of_stock: bool = False
