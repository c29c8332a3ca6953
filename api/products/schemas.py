"""
Product API schemas (request models).

Field names follow the external record (`shortDescription`, `inStock`).
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    description: str | None = None
    shortDescription: str | None = Field(default=None, max_length=255)
    inStock: bool = True
    # Category name; created on the fly when it does not exist yet.
    category: str | None = Field(default=None, min_length=1, max_length=100)
    images: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    """
    Partial update. Omitted fields are left untouched.

    `category: null` clears the link. `images`/`features` replace the stored
    list whenever they are sent, even as `[]` or `null`.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    description: str | None = None
    shortDescription: str | None = Field(default=None, max_length=255)
    inStock: bool | None = None
    category: str | None = Field(default=None, min_length=1, max_length=100)
    images: list[str] | None = None
    features: list[str] | None = None

    @field_validator("name", "price", "inStock")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)
