"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``PaginationDTO``: raw ``limit`` / ``offset`` from the caller.
- ``ProductRemovedDTO``: confirmation returned by a delete.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _non_negative(v, message: str):
    if v is not None and v < 0:
        raise ValueError(message)
    return v


def _labels(v: Optional[List[str]]) -> Optional[List[str]]:
    if v is None:
        return v
    return [label.strip() for label in v if label and label.strip()]


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``title`` and ``gender`` are non-empty strings.
    - ``price`` and ``stock`` are non-negative.
    - ``size`` / ``tag`` entries are stripped; blank entries dropped.

    ``slug`` is optional; the model derives it from ``title`` when absent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    price: float = 0
    description: Optional[str] = None
    slug: Optional[str] = None
    stock: int = 0
    size: List[str]
    gender: str
    tag: List[str] = Field(default_factory=list)

    @field_validator("title", "gender")
    @classmethod
    def must_not_be_empty(cls, v: str, info) -> str:
        if not v or not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} must not be empty.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_non_negative(cls, v: float) -> float:
        return _non_negative(v, "Price cannot be negative.")

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        return _non_negative(v, "Stock cannot be negative.")

    @field_validator("size", "tag")
    @classmethod
    def clean_labels(cls, v: List[str]) -> List[str]:
        return _labels(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only fields the caller actually supplied
    (``model_fields_set``) are merged onto the stored product.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    slug: Optional[str] = None
    stock: Optional[int] = None
    size: Optional[List[str]] = None
    gender: Optional[str] = None
    tag: Optional[List[str]] = None

    @field_validator("title", "gender", "slug")
    @classmethod
    def must_not_be_blank(cls, v: Optional[str], info) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} must not be empty.")
        return v.strip() if v is not None else v

    @field_validator("price")
    @classmethod
    def price_must_be_non_negative(cls, v: Optional[float]) -> Optional[float]:
        return _non_negative(v, "Price cannot be negative.")

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: Optional[int]) -> Optional[int]:
        return _non_negative(v, "Stock cannot be negative.")

    @field_validator("size", "tag")
    @classmethod
    def clean_labels(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _labels(v)

    def changes(self) -> dict:
        """Fields explicitly supplied by the caller, ``None`` included.

        Required columns (title, gender, size, tag, price, stock) are
        dropped when explicitly set to ``None``; only ``description`` may
        be cleared.
        """
        data = self.model_dump(include=self.model_fields_set)
        return {
            field: value
            for field, value in data.items()
            if value is not None or field == "description"
        }


class PaginationDTO(BaseModel):
    """Raw paging parameters; the service clamps them."""

    model_config = ConfigDict(frozen=True)

    limit: Optional[int] = None
    offset: Optional[int] = None


class ProductRemovedDTO(BaseModel):
    """Confirmation returned after a product is deleted."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    message: str
