# This project was developed with assistance from AI tools.
"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from kvartplan.main import app
from kvartplan.services import market_prices, reference_rates


@pytest.fixture(autouse=True)
def _clear_feed_caches():
    """Reset the module-level feed caches between tests."""
    market_prices.clear_cache()
    reference_rates.clear_cache()
    yield
    market_prices.clear_cache()
    reference_rates.clear_cache()


@pytest.fixture
def client():
    return TestClient(app)
