import pytest

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = get_user_model().objects.create_user(
        username="testuser", password="testpass123"
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def make_product():
    """Factory that persists a Product with sensible defaults."""

    def _make(**overrides) -> Product:
        defaults = {
            "title": "Men's Chill Crew Neck",
            "price": 75.0,
            "description": "Relaxed fit",
            "stock": 7,
            "size": ["S", "M", "L"],
            "gender": "men",
            "tag": ["sweatshirt"],
        }
        defaults.update(overrides)
        product = Product(**defaults)
        product.save()
        return product

    return _make
