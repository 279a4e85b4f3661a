"""Product aggregate.

Products are owned by the product store. The stock reduction flow only
reads them and asks the store to decrement their stock.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from osr.domain.exceptions import ValidationError
from osr.domain.model.value_objects import Money

LOW_STOCK_THRESHOLD = 10


class ProductStatus(Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class StockStatus(Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock`` is an integer and never negative
    """

    id: str
    name: str
    sku: str
    stock: int
    price: Money
    status: ProductStatus = ProductStatus.DRAFT

    def __post_init__(self) -> None:
        if not isinstance(self.stock, int) or isinstance(self.stock, bool):
            raise ValidationError(
                f"Stock must be an integer, got {type(self.stock).__name__}"
            )
        if self.stock < 0:
            raise ValidationError(
                f"Stock for {self.name} cannot be negative, got {self.stock}"
            )

    @property
    def stock_status(self) -> StockStatus:
        if self.stock == 0:
            return StockStatus.OUT_OF_STOCK
        if self.stock <= LOW_STOCK_THRESHOLD:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity

    def decrement_stock(self, quantity: int) -> None:
        """Remove *quantity* units from stock.

        Raises ValidationError if that would leave stock negative.
        """
        if quantity <= 0:
            raise ValidationError("Decrement quantity must be positive")
        if quantity > self.stock:
            raise ValidationError(
                f"Cannot remove {quantity} of {self.name} "
                f"(only {self.stock} in stock)"
            )
        self.stock -= quantity
