"""
Shared fixtures for the recommender tests.
"""
from unittest.mock import MagicMock

import pytest

from storefront.analytics.store import clear_events
from storefront.catalog.models import CatalogItem


@pytest.fixture
def sample_catalog() -> list[CatalogItem]:
    """Five products in provider order: men's tee, women's jacket, neutral polo, men's trouser, women's dress."""
    return [
        CatalogItem(id=1, title="Men's Cotton T-Shirt", product_type="T-Shirt", tags="Men,Cotton,Summer 25"),
        CatalogItem(id=2, title="Women's Denim Jacket", product_type="Jacket", tags="Women,Denim,Winter 24"),
        CatalogItem(id=3, title="Classic Polo", product_type="Polo", tags="Cotton"),
        CatalogItem(id=4, title="Formal Trouser", product_type="Bottom", tags="Men, Formal"),
        CatalogItem(
            id=5,
            title="Floral Dress",
            product_type="Dress",
            tags="Women, Summer 25",
            body_html="<p>Light <strong>summer</strong> dress</p>",
        ),
    ]


@pytest.fixture
def groq_response():
    """Build a fake Groq chat completion carrying ``content``."""

    def _make(content: str) -> MagicMock:
        message = MagicMock()
        message.content = content
        choice = MagicMock()
        choice.message = message
        response = MagicMock()
        response.choices = [choice]
        return response

    return _make


@pytest.fixture(autouse=True)
def _reset_events():
    clear_events()
    yield
    clear_events()
