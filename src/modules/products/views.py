"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into HTTP status codes;
the view never swallows generic exceptions.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.products.dtos import CreateProductDTO, PaginationDTO, UpdateProductDTO
from modules.products.exceptions import (
    ProductBadRequest,
    ProductError,
    ProductNotFound,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService

_STATUS_BY_ERROR = (
    (ProductBadRequest, status.HTTP_400_BAD_REQUEST),
    (ProductNotFound, status.HTTP_404_NOT_FOUND),
)


def _error_response(exc: ProductError) -> Response:
    for error_class, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return Response({"detail": str(exc)}, status=status_code)
    return Response(
        {"detail": str(exc)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _bad_request(exc: Exception) -> Response:
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    ``pk`` accepts an id, a title or a slug for retrieve/destroy; update
    requires an id.
    """

    lookup_value_regex = "[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/?limit=&offset="""
        try:
            pagination = PaginationDTO(
                limit=request.query_params.get("limit") or None,
                offset=request.query_params.get("offset") or None,
            )
        except PydanticValidationError as exc:
            return _bad_request(exc)

        try:
            products = self._service.list_products(pagination)
        except ProductError as exc:
            return _error_response(exc)
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{id|title|slug}/"""
        try:
            product = self._service.get_product(pk or "")
        except ProductError as exc:
            return _error_response(exc)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        try:
            dto = CreateProductDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return _bad_request(exc)

        try:
            product = self._service.create_product(dto)
        except ProductError as exc:
            return _error_response(exc)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{id}/"""
        try:
            dto = UpdateProductDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return _bad_request(exc)

        try:
            product = self._service.update_product(pk or "", dto)
        except ProductError as exc:
            return _error_response(exc)
        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{id}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{id|title|slug}/"""
        try:
            removed = self._service.delete_product(pk or "")
        except ProductError as exc:
            return _error_response(exc)
        return Response(removed.model_dump(mode="json"))
