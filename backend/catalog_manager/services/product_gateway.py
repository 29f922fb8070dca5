"""Outbound calls to the remote product catalog service."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import httpx
from pydantic import TypeAdapter, ValidationError

from catalog_manager.api.schemas.product import (
    Category,
    Product,
    ProductFormData,
    ProductsResponse,
)

logger = logging.getLogger(__name__)

_categories_adapter = TypeAdapter(list[Category])


class ApiError(Exception):
    """Uniform failure for every gateway call.

    Transport failures carry no status; non-2xx responses and malformed
    payloads carry the HTTP status code.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, status={self.status!r})"


def create_http_client(
    base_url: str,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build the client the gateway owns for the application's lifetime."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout,
        transport=transport,
        follow_redirects=True,
        headers={"User-Agent": "Catalog-Manager/1.0"},
    )


class ProductGateway:
    """The only component that talks to the remote catalog over HTTP.

    No retries and no caching: each call is a single attempt whose failure is
    normalized to ApiError.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def _request(
        self,
        method: str,
        path: str,
        decode: Callable[[Any], Any],
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        logger.debug(f"{method} {path} params={params}")
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error(f"Transport error on {method} {path}: {e}", exc_info=True)
            raise ApiError(str(e) or f"Request failed: {e.__class__.__name__}") from e

        if not response.is_success:
            logger.warning(f"{method} {path} returned HTTP {response.status_code}")
            raise ApiError(
                f"HTTP error! status: {response.status_code}",
                status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Non-JSON body from {method} {path}: {e}")
            raise ApiError(
                "Malformed response payload: body is not JSON",
                status=response.status_code,
            ) from e

        try:
            return decode(payload)
        except ValidationError as e:
            logger.error(f"Unexpected payload shape from {method} {path}: {e}")
            raise ApiError(
                f"Malformed response payload: {e.error_count()} validation error(s)",
                status=response.status_code,
            ) from e

    async def get_all_products(self, limit: int = 30, skip: int = 0) -> ProductsResponse:
        return await self._request(
            "GET",
            "/products",
            ProductsResponse.model_validate,
            params={"limit": limit, "skip": skip},
        )

    async def get_product(self, product_id: int) -> Product:
        return await self._request("GET", f"/products/{product_id}", Product.model_validate)

    async def search_products(self, query: str) -> ProductsResponse:
        """Server-side search; httpx takes care of URL-encoding the query."""
        return await self._request(
            "GET", "/products/search", ProductsResponse.model_validate, params={"q": query}
        )

    async def create_product(self, data: ProductFormData) -> Product:
        return await self._request(
            "POST", "/products/add", Product.model_validate, json=data.to_payload()
        )

    async def update_product(
        self, product_id: int, data: ProductFormData | Mapping[str, Any]
    ) -> Product:
        """Send a partial update; only the supplied fields go over the wire."""
        body = data.to_payload() if isinstance(data, ProductFormData) else dict(data)
        return await self._request(
            "PUT", f"/products/{product_id}", Product.model_validate, json=body
        )

    async def delete_product(self, product_id: int) -> Product:
        return await self._request("DELETE", f"/products/{product_id}", Product.model_validate)

    async def get_categories(self) -> list[Category]:
        return await self._request(
            "GET", "/products/categories", _categories_adapter.validate_python
        )
