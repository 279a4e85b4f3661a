"""Data Transfer Objects - plain containers that cross layer boundaries.

``ProcessOrderResponse`` is the one artifact callers of the stock reducer
see; ``to_dict`` renders the stable wire shape used by the CLI's JSON
output and by any other adapter built around the reducer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from osr.domain.model.product import Product
from osr.domain.model.stock import InsufficientStockItem, StockUpdate

SUCCESS_MESSAGE = "Order processed successfully! Stock updated for all items."
INSUFFICIENT_MESSAGE = "Insufficient stock for some items"


class ErrorKind(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    CONSISTENCY = "consistency"
    TRANSACTION = "transaction"


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the caller asked for (product ID + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class StockUpdateDTO:
    product_id: str
    product_name: str
    old_stock: int
    new_stock: int
    reduced_quantity: int

    @staticmethod
    def from_domain(update: StockUpdate) -> StockUpdateDTO:
        return StockUpdateDTO(
            product_id=update.product_id,
            product_name=update.product_name,
            old_stock=update.old_stock,
            new_stock=update.new_stock,
            reduced_quantity=update.reduced_quantity,
        )

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "oldStock": self.old_stock,
            "newStock": self.new_stock,
            "reducedQuantity": self.reduced_quantity,
        }


@dataclass(frozen=True)
class InsufficientStockDTO:
    product_id: str
    product_name: str
    requested_quantity: int
    available_stock: int

    @staticmethod
    def from_domain(item: InsufficientStockItem) -> InsufficientStockDTO:
        return InsufficientStockDTO(
            product_id=item.product_id,
            product_name=item.product_name,
            requested_quantity=item.requested_quantity,
            available_stock=item.available_stock,
        )

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "requestedQuantity": self.requested_quantity,
            "availableStock": self.available_stock,
        }


@dataclass(frozen=True)
class ProcessOrderResponse:
    """Output: the outcome of one ``ProcessOrder`` call.

    ``error`` is None on success, otherwise the kind of failure, so
    callers can branch on it instead of parsing ``message``.
    """

    success: bool
    message: str
    updated_items: list[StockUpdateDTO] = field(default_factory=list)
    insufficient_stock_items: list[InsufficientStockDTO] = field(default_factory=list)
    total_items_updated: int = 0
    error: ErrorKind | None = None

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def succeeded(updates: list[StockUpdate]) -> ProcessOrderResponse:
        return ProcessOrderResponse(
            success=True,
            message=SUCCESS_MESSAGE,
            updated_items=[StockUpdateDTO.from_domain(u) for u in updates],
            total_items_updated=len(updates),
        )

    @staticmethod
    def insufficient(items: list[InsufficientStockItem]) -> ProcessOrderResponse:
        return ProcessOrderResponse(
            success=False,
            message=INSUFFICIENT_MESSAGE,
            insufficient_stock_items=[InsufficientStockDTO.from_domain(i) for i in items],
            error=ErrorKind.INSUFFICIENT_STOCK,
        )

    @staticmethod
    def failed(kind: ErrorKind, message: str) -> ProcessOrderResponse:
        return ProcessOrderResponse(success=False, message=message, error=kind)

    # --- Wire shape -----------------------------------------------------------

    def to_dict(self) -> dict:
        data: dict = {
            "success": self.success,
            "message": self.message,
        }
        if self.updated_items:
            data["updatedItems"] = [u.to_dict() for u in self.updated_items]
        if self.insufficient_stock_items:
            data["insufficientStockItems"] = [
                i.to_dict() for i in self.insufficient_stock_items
            ]
        data["totalItemsUpdated"] = self.total_items_updated
        data["error"] = self.error.value if self.error else None
        return data


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    id: str
    name: str
    sku: str
    stock: int
    stock_status: str
    price: str  # formatted, e.g. "$15.00"
    status: str

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            sku=product.sku,
            stock=product.stock,
            stock_status=product.stock_status.value,
            price=str(product.price),
            status=product.status.value,
        )
