"""View models served to the catalog front-end."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_serializer


class ProductRow(BaseModel):
    id: int
    title: str
    description: str
    thumbnail: str
    brand: str
    category: str
    price_label: str
    discount_label: str | None = None
    stock_label: str
    stock_level: Literal["high", "medium", "low"]
    rating_label: str


class CatalogPage(BaseModel):
    is_loading: bool
    is_submitting: bool = False
    error: str | None = None
    query: str = ""
    rows: list[ProductRow] = Field(default_factory=list)
    total: int = 0
    shown: int = 0
    summary: str | None = None
    empty_message: str | None = None
    empty_hint: str | None = None


class CategoryOption(BaseModel):
    value: str
    label: str


class FormState(BaseModel):
    is_open: bool
    title: str | None = None
    product_id: int | None = None
    default_values: dict[str, Any] = Field(default_factory=dict)
    category_options: list[CategoryOption] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    is_submitting: bool = False
    submit_label: str | None = None


class OpenFormRequest(BaseModel):
    product_id: int | None = Field(None, description="Edit this product; omit to create")


class PromptRead(BaseModel):
    id: str
    title: str
    text: str
    confirm_label: str
    cancel_label: str


class NotificationRead(BaseModel):
    id: str
    level: str
    title: str
    text: str
    timer_ms: int | None = None
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        """Convert datetime to ISO format string."""
        return value.isoformat()


class DialogsRead(BaseModel):
    prompts: list[PromptRead]
    notifications: list[NotificationRead]


class PromptAnswer(BaseModel):
    confirmed: bool


class MutationAccepted(BaseModel):
    status: str
    page: CatalogPage | None = None
