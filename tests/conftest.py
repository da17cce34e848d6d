"""
Pytest configuration and shared fixtures for the shopping assistant tests.
"""
import os
import sys
from typing import Any, Callable, Optional
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

@pytest.fixture
def make_product() -> Callable[..., Any]:
    """Factory for Product instances with sensible defaults."""
    from catalog.models import Product

    def _make(product_id: str = "t001", **overrides) -> Product:
        data = {
            "id": product_id,
            "title": f"Test Product {product_id}",
            "brand": "TestBrand",
            "color": "Black",
            "material": "Cotton",
            "category": "Shirt",
            "gender": "Men",
            "price": 1000,
            "size": ["M", "L"],
            "rating": 4.0,
            "delivery": "Delivery in 2 days",
            "image": f"https://images.example.com/{product_id}.jpg",
            "link": f"https://shop.example.com/p/{product_id}",
        }
        data.update(overrides)
        return Product.from_dict(data)

    return _make


@pytest.fixture
def catalog():
    """The bundled product catalog."""
    from catalog.catalog import BUNDLED_CATALOG_PATH, Catalog
    return Catalog.from_json(BUNDLED_CATALOG_PATH)


# ============================================================================
# Fixtures: Preference Storage
# ============================================================================

class FlakyBackend:
    """In-memory key-value backend that can be switched to failing mode."""

    name = "flaky"

    def __init__(self):
        from preferences.backends import InMemoryKeyValueBackend
        self._inner = InMemoryKeyValueBackend()
        self.fail = False
        self.calls = 0

    def _check(self):
        from preferences.backends import StorageUnavailableError
        self.calls += 1
        if self.fail:
            raise StorageUnavailableError("backend offline")

    def get(self, key: str) -> Optional[Any]:
        self._check()
        return self._inner.get(key)

    def set(self, key: str, value: Any) -> None:
        self._check()
        self._inner.set(key, value)

    def get_stats(self):
        return {"backend": self.name}


@pytest.fixture
def flaky_backend() -> FlakyBackend:
    return FlakyBackend()


@pytest.fixture
def memory_store():
    """Preference store running on the in-memory fallback only."""
    from preferences.store import PreferenceStore
    return PreferenceStore()


@pytest.fixture
def durable_store(flaky_backend):
    """Preference store backed by a durable backend that tests can break."""
    from preferences.store import PreferenceStore
    return PreferenceStore(durable=flaky_backend)


# ============================================================================
# Fixtures: Services
# ============================================================================

@pytest.fixture
def test_settings():
    from config.settings import get_settings_for_testing
    return get_settings_for_testing()


@pytest.fixture
def search_engine(catalog, memory_store):
    from search.engine import SearchEngine
    return SearchEngine(catalog, memory_store)


@pytest.fixture
def failing_order_client():
    """Razorpay client whose every call fails."""
    from payments.orders import PaymentProviderError
    client = MagicMock()
    client.create_order.side_effect = PaymentProviderError("provider down", status_code=503)
    return client


# ============================================================================
# Fixtures: FastAPI Test Client
# ============================================================================

@pytest.fixture
def app(catalog, memory_store, test_settings, failing_order_client):
    """FastAPI application wired to in-memory services."""
    from api.app import create_app
    from api.dependencies import (
        get_catalog,
        get_order_service,
        get_preference_store,
    )
    from config.settings import get_settings
    from payments.orders import OrderService

    application = create_app()
    application.dependency_overrides[get_catalog] = lambda: catalog
    application.dependency_overrides[get_preference_store] = lambda: memory_store
    application.dependency_overrides[get_settings] = lambda: test_settings
    application.dependency_overrides[get_order_service] = (
        lambda: OrderService(test_settings, client=failing_order_client)
    )
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Synchronous HTTP client for testing FastAPI endpoints."""
    from fastapi.testclient import TestClient
    return TestClient(app)


# ============================================================================
# Markers auto-use
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "slow: marks tests as slow")


# ============================================================================
# Skip conditions
# ============================================================================

def pytest_collection_modifyitems(config, items):
    """Auto-skip integration tests if no Redis URL is configured."""
    skip_integration = pytest.mark.skip(reason="Integration tests require TEST_REDIS_URL")

    redis_url = os.getenv("TEST_REDIS_URL")

    for item in items:
        if "integration" in item.keywords and not redis_url:
            item.add_marker(skip_integration)
