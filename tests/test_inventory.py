"""Tests for products, inventory and payment validation."""

import math
from decimal import Decimal

import pytest

from vending_machine import MAX_AMOUNT, Inventory, PaymentProcessor, Product


@pytest.fixture
def coke():
    return Product("1", "Coke", 25)


@pytest.fixture
def inventory():
    return Inventory()


def test_product_is_immutable(coke):
    with pytest.raises(AttributeError):
        coke.price = 10


@pytest.mark.parametrize("price", [-1, 2.5, "25", True])
def test_product_rejects_invalid_price(price):
    with pytest.raises(ValueError):
        Product("9", "Broken", price)


def test_free_product_allowed():
    assert Product("0", "Sample", 0).price == 0


def test_add_product_creates_entry(inventory, coke):
    assert inventory.add_product(coke, 2)
    assert inventory.get_quantity("1") == 2
    assert inventory.get_product("1") is coke


def test_add_product_defaults_to_one(inventory, coke):
    inventory.add_product(coke)
    assert inventory.get_quantity("1") == 1


def test_add_product_merges_quantities(inventory, coke):
    inventory.add_product(coke, 2)
    inventory.add_product(coke, 3)
    assert inventory.get_quantity("1") == 5


@pytest.mark.parametrize("quantity", [0, -3, 1.5, True])
def test_add_product_rejects_non_positive_quantity(inventory, coke, quantity, caplog):
    assert not inventory.add_product(coke, quantity)
    assert inventory.get_quantity("1") == 0
    assert not inventory.is_available("1")
    assert "Invalid quantity" in caplog.text


def test_is_available(inventory, coke):
    assert not inventory.is_available("1")
    inventory.add_product(coke, 1)
    assert inventory.is_available("1")
    inventory.remove_product("1")
    assert not inventory.is_available("1")


def test_remove_product_decrements(inventory, coke):
    inventory.add_product(coke, 2)
    assert inventory.remove_product("1") is coke
    assert inventory.get_quantity("1") == 1


def test_remove_product_never_goes_negative(inventory, coke):
    inventory.add_product(coke, 1)
    assert inventory.remove_product("1") is coke
    assert inventory.remove_product("1") is None
    assert inventory.get_quantity("1") == 0


def test_remove_untracked_product_returns_none(inventory):
    assert inventory.remove_product("missing") is None
    assert inventory.get_quantity("missing") == 0
    assert inventory.get_product("missing") is None


@pytest.mark.parametrize("amount", [1, 25, 25.0, Decimal("100"), 10 ** 12, MAX_AMOUNT])
def test_validate_amount_accepts_whole_positive(amount):
    assert PaymentProcessor.validate_amount(amount)


@pytest.mark.parametrize("amount", [
    0, -5, 2.5, -0.0, math.nan, math.inf, -math.inf,
    Decimal("0.25"), Decimal("NaN"), Decimal("Infinity"),
    True, "25", None,
    MAX_AMOUNT + 1, 1e300, Decimal("1E+100000000"), pytest.param(10 ** 100000, id="10**100000"),
])
def test_validate_amount_rejects(amount):
    assert not PaymentProcessor.validate_amount(amount)


def test_products_compare_by_id(coke):
    relabeled = Product("1", "Coca-Cola", 30)
    assert relabeled == coke
    assert hash(relabeled) == hash(coke)
    assert Product("2", "Coke", 25) != coke
    assert coke != "1"
