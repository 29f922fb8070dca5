"""Validate product form values and map violations to field messages."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from catalog_manager.api.schemas.product import ProductFormData

# (field, pydantic error type) -> message shown next to the form field
FIELD_MESSAGES: dict[tuple[str, str], str] = {
    ("title", "string_too_short"): "Title must be at least 3 characters",
    ("title", "string_too_long"): "Title is too long",
    ("description", "string_too_short"): "Description must be at least 10 characters",
    ("price", "greater_than"): "Price must be greater than 0",
    ("discountPercentage", "greater_than_equal"): "Discount must be 0 or greater",
    ("discountPercentage", "less_than_equal"): "Discount cannot exceed 100%",
    ("rating", "greater_than_equal"): "Rating must be 0 or greater",
    ("rating", "less_than_equal"): "Rating cannot exceed 5",
    ("stock", "int_from_float"): "Stock must be a whole number",
    ("stock", "int_parsing"): "Stock must be a whole number",
    ("stock", "greater_than_equal"): "Stock cannot be negative",
    ("brand", "string_too_short"): "Brand must be at least 2 characters",
    ("category", "string_too_short"): "Please select a category",
    ("category", "missing"): "Please select a category",
}

CATEGORY_NOT_AVAILABLE = "Please select a category"


def validate_product_form(
    raw: Mapping[str, Any],
) -> tuple[ProductFormData | None, dict[str, str]]:
    """Check candidate form values; pure, no network access.

    Returns the parsed data and an empty mapping when valid, otherwise None
    and the first violation message per field (keyed by wire field name).
    """
    try:
        return ProductFormData.model_validate(dict(raw)), {}
    except ValidationError as e:
        errors: dict[str, str] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "__root__"
            if field in errors:
                continue
            errors[field] = FIELD_MESSAGES.get((field, error["type"]), error["msg"])
        return None, errors


def check_category(category: str, known_slugs: list[str]) -> str | None:
    """Reject categories outside the loaded option set.

    An empty option set (categories failed to load) accepts any value.
    """
    if known_slugs and category not in known_slugs:
        return CATEGORY_NOT_AVAILABLE
    return None
