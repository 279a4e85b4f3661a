"""Tests for the JSON-file-backed product store."""

import json
import threading

import pytest

from osr.application.dto import ErrorKind, OrderItemSpec
from osr.application.process_order import ProcessOrderHandler
from osr.domain.exceptions import ConsistencyError, TransactionError, TransactionTimeoutError
from osr.domain.repository.product_store import Deadline
from osr.infrastructure.persistence.json_product_store import JsonProductStore
from tests.fakes import make_product


@pytest.fixture
def store(tmp_path):
    s = JsonProductStore(tmp_path / "products.json")
    s.save(make_product("P1", 10, name="Mug"))
    s.save(make_product("P2", 5, name="Plate"))
    return s


class TestJsonProductStoreCatalog:

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductStore(path)
        assert json.loads(path.read_text()) == []

    def test_round_trip(self, store):
        product = store.get_by_id("P1")
        assert product.name == "Mug"
        assert product.stock == 10
        assert str(product.price) == "$10.00"
        assert [p.id for p in store.list_all()] == ["P1", "P2"]

    def test_missing_product(self, store):
        assert store.get_by_id("nope") is None

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("{not json")
        with pytest.raises(TransactionError, match="Corrupt product data"):
            JsonProductStore(path).list_all()

    @pytest.mark.parametrize(
        "field, value",
        [
            ("status", "published"),
            ("price", "abc"),
            ("stock", -1),
        ],
    )
    def test_bad_record_fails_order_as_transaction_error(self, tmp_path, field, value):
        path = tmp_path / "products.json"
        record = {
            "id": "P1",
            "name": "Mug",
            "sku": "MUG-1",
            "stock": 10,
            "price": "8.00",
            "status": "active",
        }
        record[field] = value
        path.write_text(json.dumps([record]))
        handler = ProcessOrderHandler(JsonProductStore(path))

        response = handler.handle([OrderItemSpec("P1", 1)])

        assert response.error == ErrorKind.TRANSACTION
        assert "Corrupt product data" in response.message


class TestJsonUnitOfWork:

    def test_commit_persists(self, store, tmp_path):
        with store.unit_of_work(Deadline()) as uow:
            assert uow.decrement_stock("P1", 3) == 1
            uow.commit()

        assert store.get_by_id("P1").stock == 7
        # A fresh store instance reads the same file
        assert JsonProductStore(tmp_path / "products.json").get_by_id("P1").stock == 7

    def test_uncommitted_changes_invisible(self, store):
        with store.unit_of_work(Deadline()) as uow:
            uow.decrement_stock("P1", 3)
            uow.decrement_stock("P2", 1)
            assert store.get_by_id("P1").stock == 10

        assert store.get_by_id("P1").stock == 10
        assert store.get_by_id("P2").stock == 5

    def test_unknown_product_matches_nothing(self, store):
        with store.unit_of_work(Deadline()) as uow:
            assert uow.decrement_stock("nope", 1) == 0

    def test_decrement_below_zero_refused(self, store):
        with pytest.raises(ConsistencyError, match="below zero"):
            with store.unit_of_work(Deadline()) as uow:
                uow.decrement_stock("P2", 6)

    def test_waits_at_most_until_deadline(self, store):
        with store.unit_of_work(Deadline()):
            with pytest.raises(TransactionTimeoutError):
                with store.unit_of_work(Deadline(0.05)):
                    pass

    def test_lock_shared_between_instances(self, store, tmp_path):
        other = JsonProductStore(tmp_path / "products.json")
        with store.unit_of_work(Deadline()):
            with pytest.raises(TransactionTimeoutError):
                with other.unit_of_work(Deadline(0.05)):
                    pass


class TestJsonStoreOrders:

    def test_duplicate_lines_cannot_oversell(self, store):
        """Both lines pass validation against the same read; commit refuses to go negative."""
        handler = ProcessOrderHandler(store)

        response = handler.handle([OrderItemSpec("P2", 3), OrderItemSpec("P2", 3)])

        assert response.error == ErrorKind.CONSISTENCY
        assert store.get_by_id("P2").stock == 5

    def test_concurrent_orders_for_last_unit(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductStore(path).save(make_product("P1", 1))
        barrier = threading.Barrier(4)
        results = []
        results_lock = threading.Lock()

        def place():
            handler = ProcessOrderHandler(JsonProductStore(path))
            barrier.wait()
            response = handler.handle([OrderItemSpec("P1", 1)])
            with results_lock:
                results.append(response)

        threads = [threading.Thread(target=place) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(r.success for r in results) == 1
        assert all(
            r.error == ErrorKind.INSUFFICIENT_STOCK for r in results if not r.success
        )
        assert JsonProductStore(path).get_by_id("P1").stock == 0
