"""FastAPI application bootstrap and catalog session wiring."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_manager.api.routers import dialogs, form, health, products
from catalog_manager.core.config import Settings, get_settings
from catalog_manager.services.catalog_controller import CatalogController
from catalog_manager.services.dialogs import DialogService
from catalog_manager.services.product_gateway import ProductGateway, create_http_client
from catalog_manager.services.task_runner import TaskRunner

logger = logging.getLogger(__name__)


def install_catalog(app: FastAPI, gateway: ProductGateway, settings: Settings) -> CatalogController:
    """Attach the gateway, dialog queue, task runner and controller to ``app``."""
    dialog_service = DialogService()
    controller = CatalogController(
        gateway,
        dialog_service,
        page_size=settings.page_size,
        placeholder_image=settings.placeholder_image_url,
        notification_timer_ms=settings.notification_timer_ms,
    )
    app.state.gateway = gateway
    app.state.dialogs = dialog_service
    app.state.tasks = TaskRunner()
    app.state.controller = controller
    return controller


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    async with create_http_client(
        settings.api_base_url, timeout=settings.request_timeout_seconds
    ) as client:
        controller = install_catalog(app, ProductGateway(client), settings)
        logger.info(f"[Catalog] Remote API: {settings.api_base_url}")
        await app.state.tasks.start(controller.load(), name="catalog-load")
        yield
        # decline open prompts so waiting deletes can finish before the client closes
        app.state.dialogs.decline_pending()
        await app.state.tasks.wait_idle()


def create_app() -> FastAPI:
    """Instantiate the FastAPI app and include top-level routers."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

    logger.info(f"[CORS] Allowed origins: {settings.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(products.router, prefix="/api/products", tags=["products"])
    app.include_router(form.router, prefix="/api/form", tags=["form"])
    app.include_router(dialogs.router, prefix="/api/dialogs", tags=["dialogs"])

    return app


app = create_app()
