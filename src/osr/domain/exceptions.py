"""Domain-level exceptions.

All failures of the stock reduction flow are expressed as subclasses of
DomainException so the application layer can map them onto a tagged
response and the CLI layer can catch them uniformly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from osr.domain.model.stock import InsufficientStockItem


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """One or more order items ask for more than is in stock.

    Carries every shortage found during validation, not just the first.
    """

    def __init__(self, items: list[InsufficientStockItem]) -> None:
        super().__init__(f"Insufficient stock for {len(items)} items")
        self.items = list(items)


class ConsistencyError(DomainException):
    """A stock decrement did not match the record that was read."""


class TransactionError(DomainException):
    """The store's transaction machinery failed to start or commit."""


class TransactionTimeoutError(TransactionError):
    """The unit of work outlived its deadline."""
