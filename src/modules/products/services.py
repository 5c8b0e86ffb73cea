"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Rules enforced here:
- Paging: ``limit`` falls back to ``DEFAULT_PAGE_LIMIT`` when absent or
  ``<= 0`` and is capped at ``MAX_PAGE_LIMIT``; ``offset`` falls back to 0
  when absent or negative.
- Changing ``title`` without an explicit ``slug`` re-derives the slug.
- Storage errors are caught once and reclassified into
  ``modules.products.exceptions`` types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, NoReturn, Optional, Tuple

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError

from modules.products.dtos import PaginationDTO, ProductRemovedDTO
from modules.products.exceptions import (
    InvalidProductIdentifier,
    ProductAlreadyExists,
    ProductNotFound,
    ProductUnexpectedError,
)
from modules.products.models import Product, is_uuid

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def clamp_pagination(pagination: Optional[PaginationDTO]) -> Tuple[int, int]:
    """Return the effective ``(limit, offset)`` for a listing request."""
    default_limit = getattr(settings, "DEFAULT_PAGE_LIMIT", 10)
    max_limit = getattr(settings, "MAX_PAGE_LIMIT", 100)

    limit = pagination.limit if pagination else None
    offset = pagination.offset if pagination else None

    if not limit or limit <= 0:
        limit = default_limit
    if not offset or offset < 0:
        offset = 0
    return min(limit, max_limit), offset


def _integrity_detail(exc: IntegrityError) -> str:
    """Best human-readable detail for a constraint violation.

    PostgreSQL exposes ``Key (title)=(...) already exists.`` on the driver
    error; other backends only have the exception text.
    """
    diag = getattr(exc.__cause__, "diag", None)
    detail = getattr(diag, "message_detail", None)
    return detail or str(exc)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        """Persist a new product; the model derives the slug.

        Raises:
            ProductAlreadyExists: if title or slug is already taken.
        """
        log = logger.bind(title=dto.title)
        product = Product(**dto.model_dump())
        try:
            product = self._repo.save(product)
        except DatabaseError as exc:
            self._handle_db_exception(exc, log)
        log.info("product.created", product_id=str(product.id), slug=product.slug)
        return product

    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Merge the supplied fields onto an existing product.

        Raises:
            InvalidProductIdentifier: if ``id`` is not a UUID.
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if the new title or slug is taken.
        """
        log = logger.bind(product_id=id)
        if not is_uuid(id):
            log.warning("product.invalid_identifier")
            raise InvalidProductIdentifier("Invalid UUID format")

        try:
            product = self._repo.get_by_id(id)
        except (DatabaseError, ValidationError) as exc:
            self._handle_db_exception(exc, log)
        if not product:
            raise ProductNotFound(f"Product with id {id} not found")

        changes = dto.changes()
        previous_title = product.title
        for field, value in changes.items():
            setattr(product, field, value)
        if (
            "slug" not in changes
            and "title" in changes
            and changes["title"] != previous_title
        ):
            product.slug = product.title

        try:
            product = self._repo.save(product)
        except DatabaseError as exc:
            self._handle_db_exception(exc, log)
        log.info("product.updated", fields=sorted(changes))
        return product

    def delete_product(self, term: str) -> ProductRemovedDTO:
        """Delete the product matching ``term`` (id, title or slug).

        Raises:
            ProductNotFound: if nothing matches ``term``.
        """
        product = self.get_product(term)
        product_id = product.id
        try:
            self._repo.delete(product)
        except DatabaseError as exc:
            self._handle_db_exception(exc, logger.bind(product_id=str(product_id)))
        logger.info("product.removed", product_id=str(product_id), term=term)
        return ProductRemovedDTO(
            id=product_id,
            message=f"Product with id {term} has been removed",
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, pagination: Optional[PaginationDTO] = None) -> List[Product]:
        """Return one page of products ordered by id."""
        limit, offset = clamp_pagination(pagination)
        try:
            return self._repo.list(limit, offset)
        except DatabaseError as exc:
            self._handle_db_exception(exc, logger.bind(limit=limit, offset=offset))

    def get_product(self, term: str) -> Product:
        """Retrieve a single product by id, title or slug.

        A UUID-shaped ``term`` is only ever matched against the id.

        Raises:
            ProductNotFound: if nothing matches ``term``.
        """
        try:
            product = self._repo.find_one(term)
        except (DatabaseError, ValidationError) as exc:
            self._handle_db_exception(exc, logger.bind(term=term))
        if not product:
            raise ProductNotFound(f"Product with {term} not found")
        logger.info("product.retrieved", product_id=str(product.id))
        return product

    # ------------------------------------------------------------------
    # Error translation
    # ------------------------------------------------------------------

    @staticmethod
    def _handle_db_exception(exc: Exception, log) -> NoReturn:
        if isinstance(exc, IntegrityError):
            detail = _integrity_detail(exc)
            log.warning("product.constraint_violation", detail=detail)
            raise ProductAlreadyExists(detail) from exc
        if isinstance(exc, ValidationError):
            log.warning("product.invalid_identifier")
            raise InvalidProductIdentifier("Invalid UUID format") from exc
        log.exception("product.unexpected_db_error")
        raise ProductUnexpectedError() from exc
