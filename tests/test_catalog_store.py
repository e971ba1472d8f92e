"""Tests for the catalog store and its persistence port."""

import json

import pytest

from grso_pos.config import settings
from grso_pos.errors import PersistenceError
from grso_pos.models.catalog import CatalogState, Product, ProductVariant
from grso_pos.models.inventory import ImportRow
from grso_pos.models.sales import CartItem, PaymentMethod
from grso_pos.services.catalog_store import CatalogStore
from grso_pos.services.storage.persistence import (
    InMemoryStatePersistence,
    RedisStatePersistence,
)


class _FailingPersistence(InMemoryStatePersistence):
    """Persistence whose writes fail once ``broken`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.broken = False

    async def save(self, state: CatalogState) -> None:
        if self.broken:
            raise PersistenceError("disk full")
        await super().save(state)


def _draft(name: str = "Tee", category: str = "Hauts", stock: int = 5) -> Product:
    return Product(
        name=name,
        category=category,
        price=10,
        variants=[ProductVariant(size="M", stock=stock, low_stock_threshold=2)],
    )


def _cart_line(product: Product, quantity: int) -> CartItem:
    variant = product.variants[0]
    return CartItem(
        product_id=product.id,
        name=product.name,
        price=product.price,
        size=variant.size,
        stock=variant.stock,
        quantity=quantity,
    )


@pytest.mark.asyncio
async def test_add_product_persists_and_creates_category():
    persistence = InMemoryStatePersistence()
    store = CatalogStore(persistence)

    product = await store.add_product(_draft())

    assert product.id.startswith("prod_")
    assert [c.name for c in store.categories] == ["Hauts"]
    reloaded = await persistence.load()
    assert reloaded == store.state


@pytest.mark.asyncio
async def test_transactions_are_prepended_newest_first(store):
    product = await store.add_product(_draft(stock=10))

    first = await store.complete_transaction([_cart_line(product, 1)], PaymentMethod.CARD, 1)
    second = await store.complete_transaction([_cart_line(product, 2)], PaymentMethod.CASH, 2)

    assert [t.id for t in store.transactions] == [second.id, first.id]
    assert store.products[0].variants[0].stock == 7


@pytest.mark.asyncio
async def test_failed_write_keeps_previous_state():
    persistence = _FailingPersistence()
    store = CatalogStore(persistence)
    product = await store.add_product(_draft())
    before = store.state

    persistence.broken = True
    with pytest.raises(PersistenceError):
        await store.complete_transaction([_cart_line(product, 2)], PaymentMethod.CARD, 1)

    assert store.state is before
    assert store.transactions == []
    assert store.products[0].variants[0].stock == 5


@pytest.mark.asyncio
async def test_store_rehydrates_from_redis(redis_client):
    first = CatalogStore(RedisStatePersistence(redis_client))
    await first.add_product(_draft())
    await first.bulk_add_or_update_products(
        [ImportRow(name="Basket", category="Chaussures", price=60, size="42", stock=2)]
    )

    second = CatalogStore(RedisStatePersistence(redis_client))
    state = await second.load()

    assert [p.name for p in state.products] == ["Tee", "Basket"]
    assert [c.name for c in state.categories] == ["Hauts", "Chaussures"]


@pytest.mark.asyncio
async def test_redis_slot_uses_versioned_camel_case_envelope(store, redis_client):
    await store.add_product(_draft())

    envelope = json.loads(await redis_client.get(settings.STORAGE_KEY))

    assert envelope["version"] == settings.STORAGE_SCHEMA_VERSION
    assert set(envelope["state"]) == {"products", "transactions", "categories"}
    variant = envelope["state"]["products"][0]["variants"][0]
    assert variant == {"size": "M", "stock": 5, "lowStockThreshold": 2}


@pytest.mark.asyncio
async def test_newer_schema_version_is_rejected(redis_client):
    await redis_client.set(
        settings.STORAGE_KEY,
        json.dumps({"state": {}, "version": settings.STORAGE_SCHEMA_VERSION + 1}),
    )
    store = CatalogStore(RedisStatePersistence(redis_client))

    with pytest.raises(PersistenceError):
        await store.load()


@pytest.mark.asyncio
@pytest.mark.parametrize("version", ["1", None, 1.5, True])
async def test_non_integer_schema_version_is_rejected(redis_client, version):
    await redis_client.set(
        settings.STORAGE_KEY, json.dumps({"state": {}, "version": version})
    )
    store = CatalogStore(RedisStatePersistence(redis_client))

    with pytest.raises(PersistenceError, match="invalid schema version"):
        await store.load()


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["[]", '"text"', "42"])
async def test_non_object_envelope_is_rejected(redis_client, raw):
    await redis_client.set(settings.STORAGE_KEY, raw)
    store = CatalogStore(RedisStatePersistence(redis_client))

    with pytest.raises(PersistenceError, match="not a JSON object"):
        await store.load()


@pytest.mark.asyncio
async def test_explicit_schema_version_zero_is_kept():
    persistence = InMemoryStatePersistence(schema_version=0)
    store = CatalogStore(persistence)
    await store.add_product(_draft())

    assert persistence.schema_version == 0
    assert json.loads(persistence._raw)["version"] == 0


@pytest.mark.asyncio
async def test_replace_state_overwrites_everything(store):
    await store.add_product(_draft())

    await store.replace_state(CatalogState())

    assert store.products == []
    assert store.categories == []
    assert await store._persistence.load() == CatalogState()
