"""Tests for category maintenance, product CRUD and the bulk import merge."""

import pytest

from grso_pos.errors import ProductNotFoundError
from grso_pos.models.catalog import Category, Product, ProductVariant
from grso_pos.models.inventory import ImportRow
from grso_pos.services.engine.catalog import (
    create_product,
    ensure_category,
    merge_import_rows,
    update_product,
)


def _tee() -> Product:
    return Product(
        id="prod_tee",
        name="Tee",
        category="Hauts",
        price=10,
        variants=[ProductVariant(size="M", stock=5, low_stock_threshold=2)],
    )


def _row(**overrides) -> ImportRow:
    values = {
        "name": "Tee",
        "category": "Hauts",
        "price": 12,
        "size": "M",
        "stock": 8,
        "low_stock_threshold": 2,
    }
    values.update(overrides)
    return ImportRow(**values)


HAUTS = Category(id="cat_hauts", name="Hauts")


def test_ensure_category_is_idempotent():
    categories = ensure_category([], "Chaussures")
    categories = ensure_category(categories, "Chaussures")

    assert [c.name for c in categories] == ["Chaussures"]
    assert categories[0].id.startswith("cat_")


def test_create_product_assigns_id_and_category():
    draft = _tee().model_copy(update={"id": ""})

    products, categories, product = create_product([], [HAUTS], draft)

    assert product.id.startswith("prod_")
    assert products == [product]
    assert categories == [HAUTS]

    _, categories, _ = create_product(products, categories, draft.model_copy(update={"category": "Bas"}))
    assert [c.name for c in categories] == ["Hauts", "Bas"]


def test_update_product_keeps_position_and_adds_category():
    other = Product(id="prod_jean", name="Jean", category="Bas", price=40, variants=[])
    edited = _tee().model_copy(update={"category": "Promo", "price": 8})

    products, categories = update_product([_tee(), other], [HAUTS], edited)

    assert [p.id for p in products] == ["prod_tee", "prod_jean"]
    assert products[0].price == 8
    assert [c.name for c in categories] == ["Hauts", "Promo"]


def test_update_unknown_product_raises():
    with pytest.raises(ProductNotFoundError):
        update_product([_tee()], [HAUTS], _tee().model_copy(update={"id": "prod_missing"}))


def test_categories_are_never_removed():
    _, categories = update_product(
        [_tee()], [HAUTS], _tee().model_copy(update={"category": "Autre"})
    )

    assert [c.name for c in categories] == ["Hauts", "Autre"]


def test_merge_overwrites_existing_variant():
    products, categories = merge_import_rows([_tee()], [HAUTS], [_row()])

    assert len(products) == 1
    tee = products[0]
    assert tee.name == "Tee"
    assert tee.price == 12
    assert len(tee.variants) == 1
    assert tee.variants[0].size == "M"
    assert tee.variants[0].stock == 8
    assert categories == [HAUTS]


def test_merge_appends_new_size():
    products, _ = merge_import_rows([_tee()], [HAUTS], [_row(size="L", stock=3, price=10)])

    tee = products[0]
    assert [v.size for v in tee.variants] == ["M", "L"]
    assert tee.find_variant("M").stock == 5
    assert tee.find_variant("L").stock == 3


def test_merge_matches_names_case_insensitively_but_sizes_exactly():
    products, _ = merge_import_rows([_tee()], [HAUTS], [_row(name="TEE", size="m", stock=1)])

    assert len(products) == 1
    assert [v.size for v in products[0].variants] == ["M", "m"]


def test_merge_creates_category_once_per_batch():
    rows = [
        _row(name="Basket", category="Chaussures", size="42"),
        _row(name="Sandale", category="Chaussures", size="40"),
    ]

    products, categories = merge_import_rows([], [], rows)

    assert [c.name for c in categories] == ["Chaussures"]
    assert [p.name for p in products] == ["Basket", "Sandale"]
    assert all(p.id.startswith("prod_") for p in products)


def test_merge_is_a_sequential_fold():
    rows = [
        _row(name="Short", category="Bas", price=15, size="S", stock=1),
        _row(name="short", category="Été", price=18, size="M", stock=2),
        _row(name="Short", category="Été", price=20, size="S", stock=7),
    ]

    products, categories = merge_import_rows([], [], rows)

    assert len(products) == 1
    short = products[0]
    assert short.name == "Short"
    assert short.price == 20
    assert short.category == "Été"
    assert [(v.size, v.stock) for v in short.variants] == [("S", 7), ("M", 2)]
    assert [c.name for c in categories] == ["Bas", "Été"]


def test_merge_leaves_inputs_untouched():
    original = [_tee()]
    categories = [HAUTS]

    merge_import_rows(original, categories, [_row(stock=99, category="Neuf")])

    assert original[0].variants[0].stock == 5
    assert original[0].price == 10
    assert categories == [HAUTS]
