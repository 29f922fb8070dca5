"""Pydantic models describing Product payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProductFields(BaseModel):
    """Attributes shared by stored products and form submissions."""

    title: str = ""
    description: str = ""
    price: float = 0.0
    discount_percentage: float = Field(0.0, alias="discountPercentage")
    rating: float = 0.0
    stock: int = 0
    brand: str = ""
    category: str = ""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Product(ProductFields):
    """A catalog item as held by the remote service and the local collection.

    Frozen so a copy of the product list is a complete rollback snapshot.
    """

    id: int
    thumbnail: str = ""
    images: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        """Treat explicit nulls from the remote service as missing values."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ProductsResponse(BaseModel):
    products: list[Product]
    total: int = 0
    skip: int = 0
    limit: int = 0


class ProductFormData(BaseModel):
    """Values submitted from the product form, checked before any network call."""

    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10)
    price: float = Field(..., gt=0)
    discount_percentage: float = Field(0.0, ge=0, le=100, alias="discountPercentage")
    rating: float = Field(0.0, ge=0, le=5)
    stock: int = Field(..., ge=0)
    brand: str = Field(..., min_length=2)
    category: str = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the camelCase wire names, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class Category(BaseModel):
    """Category entry; the remote service sends bare slugs or objects."""

    slug: str
    name: str
    url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def coerce_shape(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"slug": data, "name": data}
        if isinstance(data, dict):
            slug = data.get("slug") or data.get("name")
            name = data.get("name") or data.get("slug")
            return {**data, "slug": slug, "name": name}
        return data

    @property
    def label(self) -> str:
        """Human label: first letter capitalised, dashes read as spaces."""
        return self.slug[:1].upper() + self.slug[1:].replace("-", " ")
