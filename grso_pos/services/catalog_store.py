"""Catalog store: owns the state and commits every change through the port."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from typing import Annotated

from fastapi import Depends, HTTPException, status

from grso_pos.errors import PersistenceError
from grso_pos.models.catalog import CatalogState, Category, Product
from grso_pos.models.inventory import ImportRow
from grso_pos.models.sales import CartItem, PaymentMethod, Transaction
from grso_pos.services.engine import catalog as catalog_engine
from grso_pos.services.engine.checkout import commit_transaction
from grso_pos.services.storage.persistence import StatePersistence, create_persistence

logger = logging.getLogger(__name__)


class CatalogStore:
    """State container for products, categories and transactions.

    Each mutation derives a complete new state, writes it to the persistence
    port and only then swaps it in. A failed write leaves the current state
    untouched.
    """

    def __init__(self, persistence: StatePersistence) -> None:
        self._persistence = persistence
        self._lock = asyncio.Lock()
        self._state = CatalogState()
        self._loaded = False

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def products(self) -> list[Product]:
        return self._state.products

    @property
    def transactions(self) -> list[Transaction]:
        return self._state.transactions

    @property
    def categories(self) -> list[Category]:
        return self._state.categories

    async def load(self) -> CatalogState:
        """Rehydrate from the persistence port on first use."""

        async with self._lock:
            if not self._loaded:
                stored = await self._persistence.load()
                self._state = stored or CatalogState()
                self._loaded = True
                logger.info(
                    "Catalog loaded: %d products, %d categories, %d transactions",
                    len(self._state.products),
                    len(self._state.categories),
                    len(self._state.transactions),
                )
        return self._state

    async def _commit(self, state: CatalogState) -> CatalogState:
        await self._persistence.save(state)
        self._state = state
        return state

    async def add_product(self, draft: Product) -> Product:
        await self.load()
        async with self._lock:
            products, categories, product = catalog_engine.create_product(
                self._state.products, self._state.categories, draft
            )
            await self._commit(
                self._state.model_copy(
                    update={"products": products, "categories": categories}
                )
            )
        logger.info("Added product %s (%s)", product.id, product.name)
        return product

    async def update_product(self, product: Product) -> Product:
        await self.load()
        async with self._lock:
            products, categories = catalog_engine.update_product(
                self._state.products, self._state.categories, product
            )
            await self._commit(
                self._state.model_copy(
                    update={"products": products, "categories": categories}
                )
            )
        logger.info("Updated product %s (%s)", product.id, product.name)
        return product

    async def complete_transaction(
        self,
        cart: Sequence[CartItem],
        payment_method: PaymentMethod,
        seller_id: int,
    ) -> Transaction:
        """Record a sale and decrement stock in a single state replacement."""

        await self.load()
        async with self._lock:
            result = commit_transaction(
                self._state.products, cart, payment_method, seller_id
            )
            await self._commit(
                self._state.model_copy(
                    update={
                        "products": result.products,
                        "transactions": [result.transaction, *self._state.transactions],
                    }
                )
            )
        logger.info(
            "Completed transaction %s: %d lines, total %.2f (%s)",
            result.transaction.id,
            len(result.transaction.items),
            result.transaction.total,
            payment_method.value,
        )
        return result.transaction

    async def bulk_add_or_update_products(
        self, rows: Iterable[ImportRow]
    ) -> CatalogState:
        await self.load()
        rows = list(rows)
        async with self._lock:
            products, categories = catalog_engine.merge_import_rows(
                self._state.products, self._state.categories, rows
            )
            state = await self._commit(
                self._state.model_copy(
                    update={"products": products, "categories": categories}
                )
            )
        logger.info("Merged %d import rows into the catalog", len(rows))
        return state

    async def replace_state(self, state: CatalogState) -> CatalogState:
        """Overwrite the whole state, as a restore from backup does."""

        await self.load()
        async with self._lock:
            replaced = await self._commit(state)
        logger.info(
            "Catalog state replaced: %d products, %d categories, %d transactions",
            len(state.products),
            len(state.categories),
            len(state.transactions),
        )
        return replaced


_store: CatalogStore | None = None


async def load_catalog_store() -> CatalogStore:
    """Return the process-wide store, loading it from storage on first use."""

    global _store
    if _store is None:
        _store = CatalogStore(create_persistence())
    await _store.load()
    return _store


async def get_catalog_store() -> CatalogStore:
    """FastAPI dependency returning the loaded store, 503 while storage is unreadable."""

    try:
        return await load_catalog_store()
    except PersistenceError as error:
        logger.error("Catalog storage unavailable: %s", error)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog storage unavailable",
        ) from error


CatalogStoreDependency = Annotated[CatalogStore, Depends(get_catalog_store)]
