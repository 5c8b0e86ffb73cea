"""Product model with title/slug uniqueness and slug derivation.

Business rules implemented:
- ``title`` and ``slug`` are unique (DB constraints; violations surface as
  ``IntegrityError`` and are translated by the service layer).
- ``slug`` is derived from ``title`` on insert when not supplied and is
  re-normalised on every save.
- ``price`` and ``stock`` cannot be negative.
"""

from __future__ import annotations

import re

import structlog

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)

# Characters dropped from slugs: ASCII apostrophe, typographic apostrophe, backtick.
_SLUG_STRIP = str.maketrans("", "", "'’`")

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def normalize_slug(text: str) -> str:
    """Lowercase ``text``, turn spaces into ``_`` and drop apostrophes/backticks.

    >>> normalize_slug("Men's Chill Crew Neck")
    'mens_chill_crew_neck'
    """
    return text.lower().replace(" ", "_").translate(_SLUG_STRIP)


def is_uuid(value: str) -> bool:
    """True when ``value`` is a UUID in canonical 8-4-4-4-12 form.

    Version and variant nibbles are not checked: any hex string of that
    shape is treated as an id, never as a title or slug.
    """
    return bool(_UUID_RE.match(value))


class Product(BaseModel):
    """Product aggregate root.

    ``size`` and ``tag`` are JSON arrays of strings so the schema works on
    both PostgreSQL and SQLite.  ``unique=True`` on ``title`` and ``slug``
    creates the UNIQUE indexes.
    """

    title = models.TextField(unique=True)
    price = models.FloatField(default=0, validators=[MinValueValidator(0)])
    description = models.TextField(null=True, blank=True, default=None)  # noqa: DJ01
    slug = models.TextField(unique=True, blank=True)
    stock = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    size = models.JSONField(default=list)
    gender = models.TextField()
    tag = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if is_new and not self.slug:
            self.slug = self.title
        self.slug = normalize_slug(self.slug)
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=str(self.id),
                slug=self.slug,
                title=self.title,
            )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.slug} - {self.title}"
