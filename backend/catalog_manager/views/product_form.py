"""State of the create/edit product form."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from catalog_manager.api.schemas.product import Category, Product, ProductFormData
from catalog_manager.services.product_gateway import ApiError, ProductGateway
from catalog_manager.utils.product_validator import check_category, validate_product_form

logger = logging.getLogger(__name__)

FORM_FIELDS = (
    "title",
    "description",
    "price",
    "discountPercentage",
    "rating",
    "stock",
    "brand",
    "category",
)

CREATE_DEFAULTS: dict[str, Any] = {
    "price": 0,
    "discountPercentage": 0,
    "rating": 0,
    "stock": 0,
}


class ProductForm:
    """Form bound to an existing product (edit) or to nothing (create)."""

    def __init__(self, product: Product | None = None) -> None:
        self.product = product
        self.categories: list[Category] = []
        self.errors: dict[str, str] = {}

    @property
    def is_editing(self) -> bool:
        return self.product is not None

    @property
    def title(self) -> str:
        return "Edit Product" if self.is_editing else "Create New Product"

    def submit_label(self, is_submitting: bool) -> str:
        if is_submitting:
            return "Saving..."
        return "Update Product" if self.is_editing else "Create Product"

    def default_values(self) -> dict[str, Any]:
        if self.product is None:
            return dict(CREATE_DEFAULTS)
        values = self.product.model_dump(by_alias=True)
        return {name: values[name] for name in FORM_FIELDS}

    def category_options(self) -> list[dict[str, str]]:
        return [{"value": c.slug, "label": c.label} for c in self.categories]

    async def load_categories(self, gateway: ProductGateway) -> None:
        """Fetch the category options once; failures leave the list empty."""
        try:
            self.categories = await gateway.get_categories()
        except ApiError as e:
            logger.error(f"Failed to load categories: {e.message}")
            self.categories = []

    def validate(self, raw: Mapping[str, Any]) -> ProductFormData | None:
        """Run the validation rules; keeps the field errors for display."""
        data, errors = validate_product_form(raw)
        if data is not None:
            message = check_category(data.category, [c.slug for c in self.categories])
            if message:
                errors = {"category": message}
                data = None
        self.errors = errors
        return data
