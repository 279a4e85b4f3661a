"""Application service: Process Order use case.

The single entry point of the stock reducer.  Rejects malformed input
before the store is touched, runs the domain service inside one unit of
work bounded by a deadline, and turns every outcome into a
``ProcessOrderResponse``.
"""

from __future__ import annotations

import logging

from osr.application.dto import ErrorKind, OrderItemSpec, ProcessOrderResponse
from osr.domain.exceptions import (
    ConsistencyError,
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
    TransactionError,
    ValidationError,
)
from osr.domain.model.stock import OrderItem, StockUpdate
from osr.domain.model.value_objects import Quantity
from osr.domain.repository.product_store import (
    DEFAULT_TIMEOUT_SECONDS,
    Deadline,
    ProductStore,
)
from osr.domain.service.stock_reduction_service import StockReductionService

logger = logging.getLogger(__name__)

EMPTY_ORDER_MESSAGE = "Items array is required and cannot be empty"

_ERROR_KINDS: list[tuple[type[DomainException], ErrorKind]] = [
    (ValidationError, ErrorKind.VALIDATION),
    (EntityNotFoundError, ErrorKind.NOT_FOUND),
    (ConsistencyError, ErrorKind.CONSISTENCY),
    (TransactionError, ErrorKind.TRANSACTION),
]


class ProcessOrderHandler:

    def __init__(
        self,
        store: ProductStore,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._store = store
        self._timeout = timeout
        self._service = StockReductionService()

    def handle(self, item_specs: list[OrderItemSpec]) -> ProcessOrderResponse:
        """Reduce stock for every item, or for none of them."""
        if not item_specs:
            return ProcessOrderResponse.failed(ErrorKind.VALIDATION, EMPTY_ORDER_MESSAGE)

        try:
            items = self._to_order_items(item_specs)
        except ValidationError as exc:
            logger.info("Order rejected before touching the store: %s", exc)
            return self._failure(ErrorKind.VALIDATION, exc)

        logger.debug("Processing order with %d items", len(items))
        try:
            updates = self._run(items)
        except InsufficientStockError as exc:
            return ProcessOrderResponse.insufficient(exc.items)
        except DomainException as exc:
            kind = self._kind_of(exc)
            logger.warning("Order aborted (%s): %s", kind.value, exc)
            return self._failure(kind, exc)

        logger.info("Order committed, %d products updated", len(updates))
        return ProcessOrderResponse.succeeded(updates)

    # --- Internal helpers -----------------------------------------------------

    def _run(self, items: list[OrderItem]) -> list[StockUpdate]:
        deadline = Deadline(self._timeout)
        try:
            with self._store.unit_of_work(deadline) as uow:
                return self._service.reduce_for_order(uow, items)
        except OSError as exc:
            raise TransactionError(f"Product store unavailable: {exc}") from exc

    @staticmethod
    def _to_order_items(item_specs: list[OrderItemSpec]) -> list[OrderItem]:
        items: list[OrderItem] = []
        for spec in item_specs:
            try:
                quantity = Quantity(spec.quantity)
            except ValidationError as exc:
                raise ValidationError(
                    f"Invalid quantity: {spec.quantity} for product {spec.product_id}"
                ) from exc
            items.append(OrderItem(product_id=spec.product_id, quantity=quantity.value))
        return items

    @staticmethod
    def _kind_of(exc: DomainException) -> ErrorKind:
        for exc_type, kind in _ERROR_KINDS:
            if isinstance(exc, exc_type):
                return kind
        return ErrorKind.TRANSACTION

    @staticmethod
    def _failure(kind: ErrorKind, exc: Exception) -> ProcessOrderResponse:
        return ProcessOrderResponse.failed(kind, f"Error processing order: {exc}")
