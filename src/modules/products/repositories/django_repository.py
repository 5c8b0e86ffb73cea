"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Look-ups follow the Null Object pattern: they return ``None`` instead of
raising HTTP-level exceptions, and storage errors (``IntegrityError``,
malformed-UUID ``ValidationError``) propagate untouched. The Service Layer
decides how to translate both into domain failures.
"""

from __future__ import annotations

from typing import List, Optional

import structlog

from django.db import transaction
from django.db.models import Q, Value
from django.db.models.functions import Upper

from modules.products.models import Product, is_uuid
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        A malformed id raises ``django.core.exceptions.ValidationError``.
        """
        return Product.objects.filter(id=id).first()

    def get_by_title_or_slug(self, term: str) -> Optional[Product]:
        """Match ``term`` against the title (case-insensitive) or the slug.

        Both sides of the title comparison go through the database's
        ``UPPER`` so backends that only fold ASCII still match non-ASCII
        titles exactly.
        """
        return (
            Product.objects.annotate(upper_title=Upper("title"))
            .filter(Q(upper_title=Upper(Value(term))) | Q(slug=term.lower()))
            .order_by("id")
            .first()
        )

    def find_one(self, term: str) -> Optional[Product]:
        if is_uuid(term):
            return self.get_by_id(term)
        return self.get_by_title_or_slug(term)

    def list(self, limit: int, offset: int) -> List[Product]:
        """Return ``limit`` products starting at ``offset``, ordered by id."""
        return list(Product.objects.order_by("id")[offset : offset + limit])

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info(
            "product.saved",
            product_id=str(entity.id),
            slug=entity.slug,
        )
        return entity

    @transaction.atomic
    def delete(self, entity: Product) -> None:
        """Hard-delete a product."""
        product_id = str(entity.id)
        entity.delete()
        logger.info("product.deleted", product_id=product_id)
