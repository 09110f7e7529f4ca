"""Central test fixtures."""

import pytest

from ordering import Item, Order, OrderingSettings, Product, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Keep the host environment out of the settings and reset the cache around each test."""
    for name in ("ORDERING_LOG_LEVEL", "ORDERING_REJECTION_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> OrderingSettings:
    return OrderingSettings()


@pytest.fixture
def order(settings: OrderingSettings) -> Order:
    """Create an empty Order."""
    return Order(settings=settings)


@pytest.fixture
def pen() -> Product:
    return Product(sku="PEN", name="Ballpoint pen")


@pytest.fixture
def notebook() -> Product:
    return Product(sku="NTB", name="Notebook")


@pytest.fixture
def make_item():
    """Build items without any validation of price or quantity."""

    def factory(product: Product, price: float, quantity: int) -> Item:
        return Item(product=product, price=price, quantity=quantity)

    return factory
