"""Application service: Show Products use case (query)."""

from __future__ import annotations

from osr.application.dto import ProductDTO
from osr.domain.exceptions import EntityNotFoundError
from osr.domain.repository.product_store import ProductStore


class ShowProductsHandler:

    def __init__(self, store: ProductStore) -> None:
        self._store = store

    def handle(self) -> list[ProductDTO]:
        return [ProductDTO.from_domain(p) for p in self._store.list_all()]

    def handle_one(self, product_id: str) -> ProductDTO:
        product = self._store.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: {product_id}")
        return ProductDTO.from_domain(product)
