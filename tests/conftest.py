from typing import Generator

import pytest

from services.pricing_catalog import reset_pricing_catalog


@pytest.fixture(autouse=True)
def _fresh_pricing_catalog() -> Generator[None, None, None]:
    """Rebuild the shared catalog around each test."""
    reset_pricing_catalog()
    yield
    reset_pricing_catalog()
