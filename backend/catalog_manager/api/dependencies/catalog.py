"""Access to the catalog session objects owned by the application."""

from fastapi import Request

from catalog_manager.services.catalog_controller import CatalogController
from catalog_manager.services.dialogs import DialogService
from catalog_manager.services.product_gateway import ProductGateway
from catalog_manager.services.task_runner import TaskRunner


def get_controller(request: Request) -> CatalogController:
    """FastAPI dependency returning the single catalog controller."""
    return request.app.state.controller


def get_dialogs(request: Request) -> DialogService:
    return request.app.state.dialogs


def get_gateway(request: Request) -> ProductGateway:
    return request.app.state.gateway


def get_tasks(request: Request) -> TaskRunner:
    return request.app.state.tasks
