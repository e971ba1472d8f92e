"""Catalog maintenance: product create/update and bulk import merge.

Categories are identified by their exact name. They are created the first
time a product references an unknown name and are never removed, even once
no product uses them anymore.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from grso_pos.errors import ProductNotFoundError
from grso_pos.models.catalog import Category, Product, ProductVariant
from grso_pos.models.inventory import ImportRow
from grso_pos.services.engine.ids import generate_id

logger = logging.getLogger(__name__)

CatalogLists = tuple[list[Product], list[Category]]


def ensure_category(categories: Sequence[Category], name: str) -> list[Category]:
    """Return the category list, with ``name`` appended if it is new."""

    if any(category.name == name for category in categories):
        return list(categories)

    logger.info("Creating category %s", name)
    return [*categories, Category(id=generate_id("cat"), name=name)]


def create_product(
    products: Sequence[Product],
    categories: Sequence[Category],
    draft: Product,
) -> tuple[list[Product], list[Category], Product]:
    """Append ``draft`` under a fresh id; returns the lists and the new product."""

    product = draft.model_copy(update={"id": generate_id("prod")}, deep=True)
    return (
        [*products, product],
        ensure_category(categories, product.category),
        product,
    )


def update_product(
    products: Sequence[Product],
    categories: Sequence[Category],
    product: Product,
) -> CatalogLists:
    """Replace the product sharing ``product.id``, keeping its position."""

    updated = list(products)
    for index, existing in enumerate(updated):
        if existing.id == product.id:
            updated[index] = product
            return updated, ensure_category(categories, product.category)

    raise ProductNotFoundError(product.id)


def _find_by_name(products: Iterable[Product], name: str) -> Product | None:
    lowered = name.lower()
    for product in products:
        if product.name.lower() == lowered:
            return product
    return None


def merge_import_rows(
    products: Sequence[Product],
    categories: Sequence[Category],
    rows: Iterable[ImportRow],
) -> CatalogLists:
    """Fold import rows into copies of the catalog, strictly in input order.

    Products match by case-insensitive name and take the row's price and
    category; variants match by exact size and take its stock and threshold.
    Unmatched sizes are appended and unmatched names become new products.
    Later rows see the effect of earlier ones.
    """

    merged = [product.model_copy(deep=True) for product in products]
    merged_categories = [category.model_copy() for category in categories]
    known_categories = {category.name for category in merged_categories}

    for row in rows:
        if row.category not in known_categories:
            merged_categories.append(Category(id=generate_id("cat"), name=row.category))
            known_categories.add(row.category)

        variant = ProductVariant(
            size=row.size,
            stock=row.stock,
            low_stock_threshold=row.low_stock_threshold,
        )

        product = _find_by_name(merged, row.name)
        if product is None:
            merged.append(
                Product(
                    id=generate_id("prod"),
                    name=row.name,
                    category=row.category,
                    price=row.price,
                    variants=[variant],
                )
            )
            continue

        product.price = row.price
        product.category = row.category
        existing = product.find_variant(row.size)
        if existing is None:
            product.variants.append(variant)
        else:
            existing.stock = row.stock
            existing.low_stock_threshold = row.low_stock_threshold

    return merged, merged_categories
