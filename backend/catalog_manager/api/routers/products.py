"""Catalog listing, reload and delete endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from catalog_manager.api.dependencies.catalog import get_controller, get_tasks
from catalog_manager.api.schemas.catalog import CatalogPage, MutationAccepted
from catalog_manager.api.schemas.product import Product
from catalog_manager.services.catalog_controller import CatalogController
from catalog_manager.services.task_runner import TaskRunner
from catalog_manager.views.catalog_view import render_catalog

logger = logging.getLogger(__name__)

router = APIRouter()


def current_page(controller: CatalogController, query: str = "") -> CatalogPage:
    return render_catalog(
        controller.products,
        query,
        is_loading=controller.is_loading,
        is_submitting=controller.is_submitting,
        error=controller.error,
    )


@router.get(
    "/",
    summary="Current catalog page, optionally filtered",
    response_model=CatalogPage,
)
async def list_products(
    q: str = Query("", description="Filter by title, brand or category (substring)"),
    controller: CatalogController = Depends(get_controller),
) -> CatalogPage:
    """Return the rows the catalog table shows, including optimistic entries."""
    return current_page(controller, q)


@router.post(
    "/reload",
    summary="Refetch the first page from the remote catalog",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=MutationAccepted,
)
async def reload_products(
    controller: CatalogController = Depends(get_controller),
    tasks: TaskRunner = Depends(get_tasks),
) -> MutationAccepted:
    """Back the "Try again" action shown next to a load error."""
    if controller.is_busy():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot reload while changes are in progress",
        )
    await tasks.start(controller.reload(), name="catalog-reload")
    return MutationAccepted(status="loading", page=current_page(controller))


@router.get(
    "/{product_id}",
    summary="Fetch one product from the local collection",
    response_model=Product,
)
async def get_product(
    product_id: int,
    controller: CatalogController = Depends(get_controller),
) -> Product:
    product = controller.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete(
    "/{product_id}",
    summary="Delete a product after user confirmation",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=MutationAccepted,
)
async def delete_product(
    product_id: int,
    controller: CatalogController = Depends(get_controller),
    tasks: TaskRunner = Depends(get_tasks),
) -> MutationAccepted:
    """Start the delete flow; it waits for the answer to a confirmation prompt.

    The pending prompt is listed by ``GET /api/dialogs``.
    """
    product = controller.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    if controller.is_fetching:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot delete while the catalog is loading",
        )
    if controller.is_busy(product_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Product {product_id} has a change in progress",
        )
    try:
        await tasks.start(
            controller.delete_product(product), name=f"delete-product-{product_id}"
        )
    except Exception as e:
        logger.error(f"Unexpected error starting delete of {product_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        ) from e
    return MutationAccepted(status="awaiting_confirmation", page=current_page(controller))
