"""Composition root - wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from osr.application.process_order import ProcessOrderHandler
from osr.infrastructure.config import Settings
from osr.infrastructure.persistence.json_product_store import JsonProductStore


def product_store(settings: Settings) -> JsonProductStore:
    return JsonProductStore(settings.products_file)


def process_order_handler(settings: Settings) -> ProcessOrderHandler:
    return ProcessOrderHandler(
        store=product_store(settings),
        timeout=settings.timeout_seconds,
    )
