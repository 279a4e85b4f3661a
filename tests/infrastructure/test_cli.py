"""End-to-end tests for the CLI adapter."""

import json

import pytest
from click.testing import CliRunner

from osr.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), *args])

    return _run


@pytest.fixture
def seeded(run):
    run("product", "add", "--id", "P1", "--name", "Mug", "--sku", "MUG-1",
        "--stock", "10", "--price", "8.00", "--status", "active")
    run("product", "add", "--id", "P2", "--name", "Plate", "--sku", "PLT-1",
        "--stock", "2", "--price", "5.00")
    return run


class TestProductCommands:

    def test_add_and_show(self, seeded):
        result = seeded("product", "show", "--id", "P1")
        assert result.exit_code == 0
        assert "Stock:  10 (low-stock)" in result.output
        assert "status=active" in result.output

    def test_list(self, seeded):
        result = seeded("product", "list")
        assert result.exit_code == 0
        assert "Mug" in result.output
        assert "Plate" in result.output

    def test_list_empty(self, run):
        result = run("product", "list")
        assert "No products found." in result.output

    def test_duplicate_add_fails(self, seeded):
        result = seeded("product", "add", "--id", "P1", "--name", "Cup", "--sku", "CUP-1",
                        "--stock", "1", "--price", "1.00")
        assert result.exit_code != 0
        assert "already exists" in result.output


class TestOrderProcess:

    def test_success(self, seeded):
        result = seeded("order", "process", "--items", "P1:3,P2:1")
        assert result.exit_code == 0
        assert "Total items updated: 2" in result.output
        assert "Mug: 10 -> 7 (-3)" in result.output

    def test_insufficient(self, seeded):
        result = seeded("order", "process", "--items", "P1:3,P2:5")
        assert result.exit_code == 1
        assert "Plate: requested 5, available 2" in result.output

        after = seeded("product", "show", "--id", "P1")
        assert "Stock:  10" in after.output

    def test_json_output(self, seeded):
        result = seeded("order", "process", "--json", "--items", "P1:20")
        data = json.loads(result.stdout)
        assert data["success"] is False
        assert data["error"] == "insufficient_stock"
        assert data["insufficientStockItems"][0]["availableStock"] == 10

    def test_bad_item_format(self, seeded):
        result = seeded("order", "process", "--items", "P1-3")
        assert result.exit_code == 2
        assert "Expected 'ProductID:Quantity'" in result.output

    def test_invalid_timeout_option(self, run):
        result = run("--timeout", "0", "product", "list")
        assert result.exit_code != 0
        assert "must be positive" in result.output
