"""Product repository interface.

Extends ``IRepository[Product]`` with the flexible look-up used by the
retrieve and delete use-cases (identifier, title or slug).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_title_or_slug(self, term: str) -> Optional["Product"]:
        """Match ``term`` case-insensitively on title or, lowercased, on slug.

        When several rows match, which one is returned is unspecified.
        """

    @abstractmethod
    def find_one(self, term: str) -> Optional["Product"]:
        """Resolve ``term`` as an id when UUID-shaped, else as title/slug."""
