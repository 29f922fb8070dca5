"""Shape the in-memory product list into what the catalog table renders."""

from __future__ import annotations

from typing import Iterable

from catalog_manager.api.schemas.catalog import CatalogPage, ProductRow
from catalog_manager.api.schemas.product import Product


def matches_query(product: Product, query: str) -> bool:
    needle = query.lower()
    return (
        needle in product.title.lower()
        or needle in product.brand.lower()
        or needle in product.category.lower()
    )


def filter_products(products: Iterable[Product], query: str | None) -> list[Product]:
    """Case-insensitive substring filter over title, brand and category."""
    if not query:
        return list(products)
    return [p for p in products if matches_query(p, query)]


def stock_level(stock: int) -> str:
    if stock > 50:
        return "high"
    if stock > 10:
        return "medium"
    return "low"


def build_product_row(product: Product) -> ProductRow:
    discount = product.discount_percentage
    return ProductRow(
        id=product.id,
        title=product.title,
        description=product.description,
        thumbnail=product.thumbnail,
        brand=product.brand,
        category=product.category,
        price_label=f"${product.price:.2f}",
        discount_label=f"-{discount:g}% off" if discount > 0 else None,
        stock_label=f"{product.stock} units",
        stock_level=stock_level(product.stock),
        rating_label=f"{product.rating:.1f}",
    )


def render_catalog(
    products: list[Product],
    query: str = "",
    *,
    is_loading: bool = False,
    is_submitting: bool = False,
    error: str | None = None,
) -> CatalogPage:
    """Build the page model: rows, summary line and empty-state texts.

    Nothing but the spinner flag is rendered while loading.
    """
    page = CatalogPage(
        is_loading=is_loading,
        is_submitting=is_submitting,
        error=None if is_loading else error,
        query=query,
        total=len(products),
    )
    if is_loading:
        return page

    visible = filter_products(products, query)
    page.rows = [build_product_row(p) for p in visible]
    page.shown = len(visible)
    if visible:
        page.summary = f"Showing {len(visible)} of {len(products)} products"
    else:
        page.empty_message = "No products found"
        page.empty_hint = (
            "Try adjusting your search"
            if query
            else "Get started by adding your first product"
        )
    return page
