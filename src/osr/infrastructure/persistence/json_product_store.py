"""JSON-file-backed implementation of ProductStore.

Units of work on the same file are serialised by a lock shared by every
store instance that points at that file.  Each unit of work reads a
snapshot when it starts, applies decrements to the snapshot only, and
replaces the file in one ``os.replace`` on commit, so a reader sees
either every decrement of an order or none of them.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import threading
from decimal import Decimal
from pathlib import Path

from osr.domain.exceptions import (
    ConsistencyError,
    TransactionError,
    TransactionTimeoutError,
    ValidationError,
)
from osr.domain.model.product import Product, ProductStatus
from osr.domain.model.value_objects import Money
from osr.domain.repository.product_store import Deadline, ProductStore, UnitOfWork

logger = logging.getLogger(__name__)

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _locks_guard:
        return _locks.setdefault(path, threading.Lock())


class JsonProductStore(ProductStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    # --- ProductStore interface -----------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self.load().get(product_id)

    def list_all(self) -> list[Product]:
        return list(self.load().values())

    def save(self, product: Product) -> None:
        with self._lock:
            products = self.load()
            products[product.id] = product
            self.persist(products)

    def unit_of_work(self, deadline: Deadline) -> JsonUnitOfWork:
        return JsonUnitOfWork(self, self._lock, deadline)

    # --- Serialization helpers ------------------------------------------------

    def load(self) -> dict[str, Product]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return {item["id"]: self._to_domain(item) for item in raw}
        except (
            json.JSONDecodeError,
            KeyError,
            TypeError,
            ValueError,
            ArithmeticError,
            ValidationError,
        ) as exc:
            raise TransactionError(
                f"Corrupt product data in {self._file_path.name}: {exc}"
            ) from exc

    def persist(self, products: dict[str, Product]) -> None:
        raw = [self._to_raw(p) for p in products.values()]
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp_path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "sku": product.sku,
            "stock": product.stock,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "status": product.status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            sku=raw["sku"],
            stock=raw["stock"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            status=ProductStatus(raw.get("status", ProductStatus.DRAFT.value)),
        )

    # --- File helpers ---------------------------------------------------------

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


class JsonUnitOfWork(UnitOfWork):

    def __init__(
        self,
        store: JsonProductStore,
        lock: threading.Lock,
        deadline: Deadline,
    ) -> None:
        super().__init__(deadline)
        self._store = store
        self._lock = lock
        self._held = False
        self._snapshot: dict[str, Product] = {}
        self._dirty = False

    def find_by_id(self, product_id: str) -> Product | None:
        self.deadline.check()
        product = self._snapshot.get(product_id)
        if product is None:
            return None
        return dataclasses.replace(product)

    def decrement_stock(self, product_id: str, amount: int) -> int:
        self.deadline.check()
        product = self._snapshot.get(product_id)
        if product is None:
            return 0
        if amount > product.stock:
            raise ConsistencyError(
                f"Decrement of {amount} would leave {product.name} below zero "
                f"(stock {product.stock})"
            )
        product.decrement_stock(amount)
        self._dirty = True
        return 1

    def rollback(self) -> None:
        if self._dirty:
            logger.debug("Rolling back pending stock changes")
        self._snapshot = {}
        self._dirty = False

    def _begin(self) -> None:
        if not self._lock.acquire(timeout=self.deadline.remaining):
            raise TransactionTimeoutError(
                "Timed out waiting for the product store to become available"
            )
        self._held = True
        try:
            self._snapshot = self._store.load()
        except BaseException:
            self._release()
            raise
        logger.debug("Unit of work started with %d products", len(self._snapshot))

    def _commit(self) -> None:
        if self._dirty:
            self._store.persist(self._snapshot)
            logger.debug("Unit of work committed")
        self._dirty = False

    def _release(self) -> None:
        if self._held:
            self._held = False
            self._lock.release()
