"""Unit tests for the Product aggregate."""

import pytest

from osr.domain.exceptions import ValidationError
from osr.domain.model.product import Product, ProductStatus, StockStatus
from osr.domain.model.stock import StockUpdate
from osr.domain.model.value_objects import Money
from tests.fakes import make_product


class TestProductCreation:

    def test_defaults_to_draft(self):
        p = Product(id="1", name="Mug", sku="MUG-1", stock=4, price=Money.of("8.00"))
        assert p.status == ProductStatus.DRAFT

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            make_product("1", stock=-1)

    def test_non_integer_stock_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            make_product("1", stock=2.0)


class TestStockStatus:

    @pytest.mark.parametrize(
        "stock, expected",
        [
            (0, StockStatus.OUT_OF_STOCK),
            (1, StockStatus.LOW_STOCK),
            (10, StockStatus.LOW_STOCK),
            (11, StockStatus.IN_STOCK),
        ],
    )
    def test_derived_from_stock(self, stock, expected):
        assert make_product("1", stock=stock).stock_status == expected


class TestDecrementStock:

    def test_decrement(self):
        p = make_product("1", stock=10)
        p.decrement_stock(3)
        assert p.stock == 7

    def test_decrement_to_zero(self):
        p = make_product("1", stock=3)
        p.decrement_stock(3)
        assert p.stock == 0
        assert p.stock_status == StockStatus.OUT_OF_STOCK

    def test_decrement_below_zero_rejected(self):
        p = make_product("1", stock=2, name="Mug")
        with pytest.raises(ValidationError, match="Cannot remove 3 of Mug"):
            p.decrement_stock(3)
        assert p.stock == 2

    def test_non_positive_decrement_rejected(self):
        p = make_product("1", stock=2)
        with pytest.raises(ValidationError, match="must be positive"):
            p.decrement_stock(0)

    def test_has_stock_for(self):
        p = make_product("1", stock=5)
        assert p.has_stock_for(5)
        assert not p.has_stock_for(6)


class TestStockUpdatePlan:

    def test_new_stock_is_old_minus_quantity(self):
        update = StockUpdate.plan("P1", "Mug", stock=10, quantity=3)
        assert update.old_stock == 10
        assert update.new_stock == 7
        assert update.reduced_quantity == 3
