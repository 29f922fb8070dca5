"""Shared fakes and fixtures for catalog tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from catalog_manager.api.schemas.product import (
    Category,
    Product,
    ProductFormData,
    ProductsResponse,
)
from catalog_manager.services.catalog_controller import CatalogController
from catalog_manager.services.dialogs import DialogPresenter, NotificationLevel
from catalog_manager.services.product_gateway import ApiError


def make_product(product_id: int, **overrides: Any) -> Product:
    values: dict[str, Any] = {
        "id": product_id,
        "title": f"Product {product_id}",
        "description": "A perfectly ordinary product",
        "price": 9.99,
        "discountPercentage": 5.0,
        "rating": 4.2,
        "stock": 20,
        "brand": "Acme",
        "category": "beauty",
        "thumbnail": f"https://cdn.example.com/{product_id}.png",
        "images": [f"https://cdn.example.com/{product_id}-1.png"],
    }
    values.update(overrides)
    return Product.model_validate(values)


def make_form_data(**overrides: Any) -> ProductFormData:
    values: dict[str, Any] = {
        "title": "Alpha Phone",
        "description": "A phone that makes calls",
        "price": 199.5,
        "discountPercentage": 10,
        "rating": 4.5,
        "stock": 12,
        "brand": "Acme",
        "category": "smartphones",
    }
    values.update(overrides)
    return ProductFormData.model_validate(values)


class FakeGateway:
    """In-memory stand-in for ProductGateway.

    ``failures`` maps an operation name to the ApiError it raises. ``hold``
    maps an operation name to an event the call waits on before answering.
    """

    def __init__(self, products: list[Product] | None = None) -> None:
        self.products = list(products or [])
        self.categories = [Category(slug="beauty", name="Beauty"), Category(slug="smartphones", name="Smartphones")]
        self.failures: dict[str, ApiError] = {}
        self.hold: dict[str, asyncio.Event] = {}
        self.calls: list[tuple[str, Any]] = []
        self.next_id = 1000

    async def _enter(self, operation: str, argument: Any = None) -> None:
        self.calls.append((operation, argument))
        if operation in self.hold:
            await self.hold[operation].wait()
        if operation in self.failures:
            raise self.failures[operation]

    def called(self, operation: str) -> list[Any]:
        return [arg for name, arg in self.calls if name == operation]

    async def get_all_products(self, limit: int = 30, skip: int = 0) -> ProductsResponse:
        await self._enter("get_all_products", limit)
        page = self.products[skip : skip + limit]
        return ProductsResponse(products=page, total=len(self.products), skip=skip, limit=limit)

    async def get_categories(self) -> list[Category]:
        await self._enter("get_categories")
        return list(self.categories)

    async def create_product(self, data: ProductFormData) -> Product:
        await self._enter("create_product", data)
        self.next_id += 1
        return Product.model_validate({"id": self.next_id, **data.to_payload()})

    async def update_product(self, product_id: int, data: ProductFormData) -> Product:
        await self._enter("update_product", product_id)
        return make_product(product_id, title="server says otherwise")

    async def delete_product(self, product_id: int) -> Product:
        await self._enter("delete_product", product_id)
        return make_product(product_id)


class RecordingDialogs(DialogPresenter):
    """Answers confirmations with a preset value and records notifications."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.confirmations: list[tuple[str, str]] = []
        self.notifications: list[tuple[NotificationLevel, str, str, int | None]] = []

    async def confirm(self, title, text, *, confirm_label="Confirm", cancel_label="Cancel") -> bool:
        self.confirmations.append((title, text))
        return self.answer

    def notify(self, level, title, text, timer_ms=None) -> None:
        self.notifications.append((NotificationLevel(level), title, text, timer_ms))

    def of_level(self, level: NotificationLevel) -> list[tuple]:
        return [n for n in self.notifications if n[0] is level]


@pytest.fixture
def products() -> list[Product]:
    return [make_product(1), make_product(2, title="Beta Shirt", brand="Zed"), make_product(3)]


@pytest.fixture
def gateway(products) -> FakeGateway:
    return FakeGateway(products)


@pytest.fixture
def dialogs() -> RecordingDialogs:
    return RecordingDialogs()


@pytest.fixture
def controller(gateway, dialogs) -> CatalogController:
    return CatalogController(gateway, dialogs, placeholder_image="https://placeholder.test/150")
