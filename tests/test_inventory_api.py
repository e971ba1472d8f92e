"""Tests for the inventory CSV endpoints."""

import pytest

from grso_pos.models.catalog import Product, ProductVariant

HEADER = "nom;catégorie;prix;taille;stock;seuil de stock faible"


async def _seed(store):
    return await store.add_product(
        Product(
            name="Tee",
            category="Hauts",
            price=10,
            variants=[ProductVariant(size="M", stock=5, low_stock_threshold=2)],
        )
    )


@pytest.mark.asyncio
async def test_import_merges_rows(client, store, admin_headers):
    await _seed(store)
    body = f"{HEADER}\nTee;Hauts;12;M;8;2\nTee;Hauts;12;L;3;1\nBasket;Chaussures;60;42;2;1\n"

    response = await client.post(
        "/inventory/import", content=body.encode("utf-8-sig"), headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json() == {"imported": 3, "productCount": 2, "categoryCount": 2}
    tee = store.products[0]
    assert tee.price == 12
    assert [(v.size, v.stock) for v in tee.variants] == [("M", 8), ("L", 3)]
    assert [c.name for c in store.categories] == ["Hauts", "Chaussures"]


@pytest.mark.asyncio
async def test_import_with_bad_row_applies_nothing(client, store, admin_headers):
    await _seed(store)
    before = store.state
    body = f"{HEADER}\nTee;Hauts;12;M;8;2\nBasket;Chaussures;soixante;42;2;1\n"

    response = await client.post(
        "/inventory/import", content=body.encode("cp1252"), headers=admin_headers
    )

    assert response.status_code == 400
    assert "Line 3" in response.json()["detail"]
    assert store.state is before


@pytest.mark.asyncio
async def test_import_with_missing_headers(client, store, admin_headers):
    response = await client.post(
        "/inventory/import", content=b"nom;prix\nTee;10\n", headers=admin_headers
    )

    assert response.status_code == 400
    assert "catégorie" in response.json()["detail"]
    assert store.products == []
    assert store.categories == []


@pytest.mark.asyncio
async def test_export_download(client, store, admin_headers):
    await _seed(store)

    response = await client.get("/inventory/export", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="inventaire-' in response.headers["content-disposition"]
    assert response.content.startswith("\ufeff".encode("utf-8"))
    assert response.content.decode("utf-8-sig").splitlines() == [
        HEADER,
        "Tee;Hauts;10,00;M;5;2",
    ]


@pytest.mark.asyncio
async def test_export_with_no_products_returns_404(client, admin_headers):
    response = await client.get("/inventory/export", headers=admin_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_inventory_routes_require_admin(client, seller_headers):
    response = await client.post("/inventory/import", content=b"", headers=seller_headers)

    assert response.status_code == 403
