"""Domain service: Stock Reduction.

Applies an order's stock decrements as one unit of work, or none of
them.  Two phases run inside the same unit of work:

  Phase 1 - validate: read every product and compare its stock with the
            requested quantity.  Shortages are collected, not raised one
            at a time, so the caller sees all of them.
  Phase 2 - commit: only when nothing is short, decrement every product
            and commit.  Any failure here rolls back the whole unit.
"""

from __future__ import annotations

import logging

from osr.domain.exceptions import (
    ConsistencyError,
    EntityNotFoundError,
    InsufficientStockError,
)
from osr.domain.model.stock import InsufficientStockItem, OrderItem, StockUpdate
from osr.domain.repository.product_store import UnitOfWork

logger = logging.getLogger(__name__)


class StockReductionService:

    def reduce_for_order(self, uow: UnitOfWork, items: list[OrderItem]) -> list[StockUpdate]:
        """Validate and apply every decrement in *items* through *uow*.

        Raises EntityNotFoundError on the first unknown product,
        InsufficientStockError with every shortage, and ConsistencyError
        when a decrement no longer matches a record.  The unit of work is
        committed only on success.
        """
        updates = self.validate(uow, items)
        self.apply(uow, updates)
        uow.commit()
        return updates

    def validate(self, uow: UnitOfWork, items: list[OrderItem]) -> list[StockUpdate]:
        pending: list[StockUpdate] = []
        shortages: list[InsufficientStockItem] = []

        for item in items:
            uow.deadline.check()
            product = uow.find_by_id(item.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: {item.product_id}")

            if not product.has_stock_for(item.quantity):
                shortages.append(
                    InsufficientStockItem(
                        product_id=item.product_id,
                        product_name=product.name,
                        requested_quantity=item.quantity,
                        available_stock=product.stock,
                    )
                )
                continue

            pending.append(
                StockUpdate.plan(item.product_id, product.name, product.stock, item.quantity)
            )

        if shortages:
            logger.info("Order short on %d of %d items", len(shortages), len(items))
            raise InsufficientStockError(shortages)

        return pending

    def apply(self, uow: UnitOfWork, updates: list[StockUpdate]) -> None:
        for update in updates:
            uow.deadline.check()
            matched = uow.decrement_stock(update.product_id, update.reduced_quantity)
            if matched == 0:
                raise ConsistencyError(
                    f"Product not found during update: {update.product_id}"
                )
