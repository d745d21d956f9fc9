from decimal import Decimal

import pytest

from catalog import Catalog, Product


@pytest.fixture
def milk_catalog():
    return Catalog([Product(1, "milk", Decimal("2.50"))])


@pytest.fixture
def grocery_catalog():
    return Catalog.load([
        {"id": 1, "name": "milk", "price": "2.5"},
        {"id": 2, "name": "bread", "price": "3.0"},
    ])
