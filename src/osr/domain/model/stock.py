"""Records exchanged by the stock reduction flow.

``OrderItem`` is the caller's request; ``StockUpdate`` and
``InsufficientStockItem`` are the per-item outcomes of validation.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderItem:
    """A requested (product, quantity) pair. Never persisted."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class StockUpdate:
    """A decrement that passed validation and is waiting to be applied."""

    product_id: str
    product_name: str
    old_stock: int
    new_stock: int
    reduced_quantity: int

    @staticmethod
    def plan(product_id: str, product_name: str, stock: int, quantity: int) -> StockUpdate:
        return StockUpdate(
            product_id=product_id,
            product_name=product_name,
            old_stock=stock,
            new_stock=stock - quantity,
            reduced_quantity=quantity,
        )


@dataclass(frozen=True)
class InsufficientStockItem:
    product_id: str
    product_name: str
    requested_quantity: int
    available_stock: int
