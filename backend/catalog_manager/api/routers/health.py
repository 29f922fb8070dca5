"""Simple health and readiness endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from catalog_manager.api.dependencies.catalog import get_controller, get_gateway
from catalog_manager.core.config import get_settings
from catalog_manager.services.catalog_controller import CatalogController
from catalog_manager.services.product_gateway import ApiError, ProductGateway

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", summary="Liveness probe")
async def live() -> dict[str, str]:
    """Indicates API process is running."""
    return {"status": "ok", "service": "catalog-manager"}


@router.get("/ready", summary="Readiness probe")
async def ready(
    gateway: ProductGateway = Depends(get_gateway),
    controller: CatalogController = Depends(get_controller),
) -> dict[str, Any]:
    """Check that the remote catalog answers and report the local catalog state.

    Used by load balancers to determine if traffic should be routed to this instance.
    """
    settings = get_settings()
    checks: dict[str, Any] = {
        "status": "ok",
        "service": "catalog-manager",
        "checks": {},
    }

    try:
        await gateway.get_all_products(limit=1)
        checks["checks"]["remote_catalog"] = {
            "status": "healthy",
            "message": f"{settings.api_base_url} reachable",
        }
    except ApiError as e:
        logger.error(f"Remote catalog health check failed: {e.message}")
        checks["checks"]["remote_catalog"] = {
            "status": "unhealthy",
            "message": f"Remote catalog unavailable: {e.message}",
            "http_status": e.status,
        }
        checks["status"] = "unhealthy"

    checks["checks"]["catalog"] = {
        "status": "loading" if controller.is_loading else "loaded",
        "products": len(controller.products),
        "error": controller.error,
    }

    if checks["status"] != "ok":
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=checks,
        )

    return checks
