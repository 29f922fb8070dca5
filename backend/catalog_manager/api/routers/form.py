"""Create/edit form endpoints: open, inspect, submit, cancel."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from catalog_manager.api.dependencies.catalog import get_controller, get_tasks
from catalog_manager.api.routers.products import current_page
from catalog_manager.api.schemas.catalog import (
    CategoryOption,
    FormState,
    MutationAccepted,
    OpenFormRequest,
)
from catalog_manager.services.catalog_controller import CatalogController
from catalog_manager.services.task_runner import TaskRunner

logger = logging.getLogger(__name__)
router = APIRouter()


def serialize_form(controller: CatalogController) -> FormState:
    """Combine the open form and the controller's submit flag into a response."""
    form = controller.form
    if form is None:
        return FormState(is_open=False, is_submitting=controller.is_submitting)
    return FormState(
        is_open=True,
        title=form.title,
        product_id=form.product.id if form.product is not None else None,
        default_values=form.default_values(),
        category_options=[CategoryOption(**o) for o in form.category_options()],
        errors=form.errors,
        is_submitting=controller.is_submitting,
        submit_label=form.submit_label(controller.is_submitting),
    )


@router.get("/", summary="Current form state", response_model=FormState)
async def get_form(
    controller: CatalogController = Depends(get_controller),
) -> FormState:
    return serialize_form(controller)


@router.post("/", summary="Open the create or edit form", response_model=FormState)
async def open_form(
    payload: OpenFormRequest | None = None,
    controller: CatalogController = Depends(get_controller),
) -> FormState:
    """Open an empty form, or one prefilled from ``product_id``.

    Category options are fetched here; if that fails the list is empty.
    """
    payload = payload or OpenFormRequest()
    product = None
    if payload.product_id is not None:
        product = controller.get_product(payload.product_id)
        if product is None:
            raise HTTPException(status_code=404, detail="Product not found")
    await controller.open_form(product)
    return serialize_form(controller)


@router.delete("/", summary="Close the form without saving")
async def close_form(
    controller: CatalogController = Depends(get_controller),
) -> Response:
    controller.close_form()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/submit",
    summary="Validate and save the form",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=MutationAccepted,
)
async def submit_form(
    values: dict[str, Any] = Body(..., description="Raw form field values"),
    controller: CatalogController = Depends(get_controller),
    tasks: TaskRunner = Depends(get_tasks),
) -> MutationAccepted:
    """Validate locally, then start the optimistic create or update.

    Field errors come back as 422 and leave the form open. On success the
    response already contains the optimistic change; the remote outcome is
    reported through ``GET /api/dialogs``.
    """
    form = controller.form
    if form is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No form is open",
        )

    data = form.validate(values)
    if data is None:
        raise HTTPException(
            status_code=422,
            detail={"errors": form.errors},
        )

    if form.product is not None and controller.get_product(form.product.id) is None:
        controller.close_form()
        raise HTTPException(
            status_code=404,
            detail=f"Product {form.product.id} is no longer in the catalog",
        )

    if controller.is_fetching:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot save while the catalog is loading",
        )

    if form.product is not None and controller.is_busy(form.product.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Product {form.product.id} has a change in progress",
        )

    action = "update" if form.is_editing else "create"
    try:
        await tasks.start(controller.submit(data), name=f"{action}-product")
    except Exception as e:
        logger.error(f"Unexpected error starting {action}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        ) from e

    logger.info(f"Started product {action}")
    return MutationAccepted(status="submitted", page=current_page(controller))
