"""Application service: Add Product use case (catalog seeding)."""

from __future__ import annotations

from osr.application.dto import ProductDTO
from osr.domain.exceptions import ValidationError
from osr.domain.model.product import Product, ProductStatus
from osr.domain.model.value_objects import Money
from osr.domain.repository.product_store import ProductStore


class AddProductHandler:

    def __init__(self, store: ProductStore) -> None:
        self._store = store

    def handle(
        self,
        product_id: str,
        name: str,
        sku: str,
        stock: int,
        price: str,
        status: str = ProductStatus.DRAFT.value,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not sku or not sku.strip():
            raise ValidationError("Product SKU is required")

        if self._store.get_by_id(product_id.strip()) is not None:
            raise ValidationError(f"Product '{product_id}' already exists")
        if any(p.sku == sku.strip() for p in self._store.list_all()):
            raise ValidationError(f"SKU '{sku}' is already in use")

        try:
            product_status = ProductStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown product status: {status!r}") from exc

        product = Product(
            id=product_id.strip(),
            name=name.strip(),
            sku=sku.strip(),
            stock=stock,
            price=Money.of(price),
            status=product_status,
        )
        self._store.save(product)
        return ProductDTO.from_domain(product)
