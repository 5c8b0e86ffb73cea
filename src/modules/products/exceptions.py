"""Product domain exceptions.

Raised by the Service Layer, which catches storage errors once and
reclassifies them.  The API layer (Views) catches these and translates
them into HTTP responses:

- ``ProductBadRequest`` and subclasses -> 400
- ``ProductNotFound`` -> 404
- ``ProductUnexpectedError`` -> 500
"""

from __future__ import annotations


class ProductError(Exception):
    """Base class for every product domain failure."""


class ProductBadRequest(ProductError):
    """The caller sent something the store rejected (client fault)."""


class ProductAlreadyExists(ProductBadRequest):
    """A product with the same title or slug already exists.

    The message carries the detail reported by the database.
    """


class InvalidProductIdentifier(ProductBadRequest):
    """An identifier was expected but the value is not a valid UUID."""


class ProductNotFound(ProductError):
    """No product matches the given identifier, title or slug."""


class ProductUnexpectedError(ProductError):
    """Any other storage failure. Details are logged, never returned."""

    def __init__(self, message: str = "Unexpected error, check server logs") -> None:
        super().__init__(message)
