"""Abstract product store and its unit of work.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete stores (JSON, in-memory) live elsewhere.

A unit of work is used as a context manager::

    with store.unit_of_work(deadline) as uow:
        product = uow.find_by_id("1")
        uow.decrement_stock("1", 3)
        uow.commit()

Leaving the block without ``commit()`` rolls back every change made
through the unit of work, whatever the reason for leaving.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from types import TracebackType

from osr.domain.exceptions import TransactionTimeoutError
from osr.domain.model.product import Product

DEFAULT_TIMEOUT_SECONDS = 30.0


class Deadline:
    """A fixed point in time after which a unit of work must give up."""

    def __init__(self, seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.seconds = seconds
        self._expires_at = time.monotonic() + seconds

    @property
    def remaining(self) -> float:
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self._expires_at

    def check(self) -> None:
        if self.expired:
            raise TransactionTimeoutError(
                f"Transaction exceeded its {self.seconds:g}s deadline"
            )


class UnitOfWork(ABC):
    """Atomic read-modify-write scope over the product store."""

    def __init__(self, deadline: Deadline) -> None:
        self.deadline = deadline
        self._committed = False
        self._closed = False

    # --- Context management ---------------------------------------------------

    def __enter__(self) -> UnitOfWork:
        self._begin()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if not self._committed:
                self.rollback()
        finally:
            self._closed = True
            self._release()

    @property
    def committed(self) -> bool:
        return self._committed

    # --- Operations -----------------------------------------------------------

    @abstractmethod
    def find_by_id(self, product_id: str) -> Product | None:
        """Return the product as seen by this unit of work, or None."""

    @abstractmethod
    def decrement_stock(self, product_id: str, amount: int) -> int:
        """Decrement stock by *amount*; return the number of matched records."""

    def commit(self) -> None:
        """Make every change visible atomically."""
        self.deadline.check()
        self._commit()
        self._committed = True

    @abstractmethod
    def rollback(self) -> None:
        """Discard every change made through this unit of work."""

    # --- Hooks for concrete stores --------------------------------------------

    @abstractmethod
    def _begin(self) -> None:
        """Acquire whatever the store needs to isolate this unit of work."""

    @abstractmethod
    def _commit(self) -> None:
        """Persist pending changes."""

    @abstractmethod
    def _release(self) -> None:
        """Release what ``_begin`` acquired. Called on every exit path."""


class ProductStore(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product outside any unit of work."""

    @abstractmethod
    def unit_of_work(self, deadline: Deadline) -> UnitOfWork:
        """Open a new unit of work bounded by *deadline*."""
