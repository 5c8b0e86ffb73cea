"""Unit tests for the Product model and its helpers.

Covers:
- normalize_slug / is_uuid helpers.
- Slug derivation on insert and re-normalisation on update.
- Title and slug uniqueness constraints.
- Price / stock validation (application + DB constraint).
- Defaults, __str__ and creation logging.
"""

from __future__ import annotations

import logging
import uuid

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from modules.products.models import Product, is_uuid, normalize_slug

pytestmark = pytest.mark.unit


def _build_product(**overrides) -> Product:
    """Build and full_clean a Product, returning the unsaved instance."""
    defaults = {
        "title": f"Test Product {uuid.uuid4().hex[:6]}",
        "price": 29.9,
        "stock": 100,
        "size": ["M"],
        "gender": "unisex",
    }
    defaults.update(overrides)
    product = Product(**defaults)
    product.full_clean()
    return product


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestNormalizeSlug:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Men's Chill Crew Neck", "mens_chill_crew_neck"),
            ("Women’s Cropped Puffer", "womens_cropped_puffer"),
            ("Unisex `Turbine` Cap", "unisex_turbine_cap"),
            ("ALREADY_lower", "already_lower"),
            ("", ""),
        ],
    )
    def test_normalises(self, text, expected):
        assert normalize_slug(text) == expected

    def test_result_has_no_stripped_characters(self):
        slug = normalize_slug("It's a `Kid’s` Hoodie ")
        for char in (" ", "'", "’", "`"):
            assert char not in slug
        assert slug == slug.lower()

    def test_is_idempotent(self):
        once = normalize_slug("Men's Quilted Shirt Jacket")
        assert normalize_slug(once) == once


class TestIsUuid:
    def test_accepts_canonical_uuid(self):
        assert is_uuid(str(uuid.uuid4())) is True

    def test_accepts_uppercase(self):
        assert is_uuid(str(uuid.uuid4()).upper()) is True

    @pytest.mark.parametrize(
        "value",
        ["", "not-a-uuid", "mens_chill_crew_neck", uuid.uuid4().hex],
    )
    def test_rejects_other_strings(self, value):
        assert is_uuid(value) is False


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


class TestProductCreation:
    def test_create_product_with_valid_data(self, make_product):
        p = make_product()
        p.refresh_from_db()
        assert p.title == "Men's Chill Crew Neck"
        assert p.slug == "mens_chill_crew_neck"
        assert p.price == 75.0
        assert p.stock == 7
        assert p.size == ["S", "M", "L"]
        assert p.tag == ["sweatshirt"]

    def test_id_is_uuid7(self, make_product):
        p = make_product()
        assert isinstance(p.id, uuid.UUID)
        assert p.id.version == 7

    def test_defaults(self):
        p = Product.objects.create(title="Plain Tee", size=["M"], gender="men")
        p.refresh_from_db()
        assert p.price == 0
        assert p.stock == 0
        assert p.tag == []
        assert p.description is None

    def test_explicit_slug_is_kept_but_normalised(self, make_product):
        p = make_product(slug="Custom Slug's")
        assert p.slug == "custom_slugs"

    def test_timestamps_set_on_create(self, make_product):
        p = make_product()
        assert p.created_at is not None
        assert p.updated_at is not None


# ---------------------------------------------------------------------------
# Slug on update
# ---------------------------------------------------------------------------


class TestSlugOnUpdate:
    def test_update_renormalises_current_slug(self, make_product):
        p = make_product()
        p.slug = "New Slug"
        p.save()
        p.refresh_from_db()
        assert p.slug == "new_slug"

    def test_title_change_alone_does_not_touch_slug(self, make_product):
        p = make_product()
        p.title = "Totally Different"
        p.save()
        p.refresh_from_db()
        assert p.slug == "mens_chill_crew_neck"


# ---------------------------------------------------------------------------
# Uniqueness
# ---------------------------------------------------------------------------


class TestUniqueness:
    def test_duplicate_title_raises(self, make_product):
        make_product(title="Unique Title", slug="first")
        with pytest.raises(IntegrityError):
            make_product(title="Unique Title", slug="second")

    def test_duplicate_slug_raises(self, make_product):
        make_product(title="First Title", slug="shared")
        with pytest.raises(IntegrityError):
            make_product(title="Second Title", slug="shared")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_negative_price_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            _build_product(price=-1)
        assert "price" in exc_info.value.message_dict

    def test_negative_stock_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            _build_product(stock=-1)
        assert "stock" in exc_info.value.message_dict

    def test_negative_price_rejected_by_db_constraint(self):
        with pytest.raises(IntegrityError):
            Product.objects.create(title="Bad", price=-5, size=[], gender="men")


# ---------------------------------------------------------------------------
# Display / Logging
# ---------------------------------------------------------------------------


class TestProductDisplay:
    def test_str_representation(self, make_product):
        p = make_product(title="Display Product")
        assert str(p) == "display_product - Display Product"


class TestProductLogging:
    def test_creation_logs_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="modules.products.models"):
            Product.objects.create(title="Logged Product", size=[], gender="men")
        messages = [r.getMessage() for r in caplog.records]
        assert any("product_created" in m for m in messages)

    def test_update_does_not_log_creation(self, make_product, caplog):
        p = make_product()
        caplog.clear()
        with caplog.at_level(logging.INFO, logger="modules.products.models"):
            p.title = "Updated Title"
            p.save()
        creation_logs = [
            r for r in caplog.records if "product_created" in r.getMessage()
        ]
        assert len(creation_logs) == 0
