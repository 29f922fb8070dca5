"""Owner of the in-memory product collection and its optimistic mutations."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator

from catalog_manager.api.schemas.product import Product, ProductFormData
from catalog_manager.services.dialogs import DialogPresenter
from catalog_manager.services.product_gateway import ApiError, ProductGateway
from catalog_manager.views.product_form import ProductForm

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_IMAGE = "https://via.placeholder.com/150"


class MutationInProgressError(RuntimeError):
    """A mutation was requested for a record that already has one in flight."""

    def __init__(self, product_id: int | None) -> None:
        target = "catalog" if product_id is None else f"product {product_id}"
        super().__init__(f"A change to {target} is still in progress")
        self.product_id = product_id


class ProductNotFoundError(KeyError):
    """The record a mutation targets is no longer in the catalog."""

    def __init__(self, product_id: int) -> None:
        super().__init__(product_id)
        self.product_id = product_id

    def __str__(self) -> str:
        return f"Product {self.product_id} is no longer in the catalog"


class CatalogController:
    """Executes load and create/update/delete against the gateway.

    Every mutation is applied to ``products`` before the remote call and
    reverted if the call fails. A record with a mutation in flight holds a
    token; a second mutation of that record raises MutationInProgressError.
    While a load or reload is fetching, every mutation is rejected the same
    way.
    """

    def __init__(
        self,
        gateway: ProductGateway,
        dialogs: DialogPresenter,
        *,
        page_size: int = 30,
        placeholder_image: str = DEFAULT_PLACEHOLDER_IMAGE,
        notification_timer_ms: int = 2000,
        clock: Callable[[], int] = time.time_ns,
    ) -> None:
        self.gateway = gateway
        self.dialogs = dialogs
        self.page_size = page_size
        self.placeholder_image = placeholder_image
        self.notification_timer_ms = notification_timer_ms
        self._clock = clock

        self.products: list[Product] = []
        self.is_loading = True
        self.error: str | None = None
        self.form: ProductForm | None = None

        self._loaded = False
        self._last_temporary_id = 0
        self._in_flight: set[int] = set()
        self._fetching = False
        self._submissions = 0

    # ------------------------------------------------------------------
    # Lookup / guards
    # ------------------------------------------------------------------

    def get_product(self, product_id: int) -> Product | None:
        return next((p for p in self.products if p.id == product_id), None)

    @property
    def is_fetching(self) -> bool:
        return self._fetching

    @property
    def is_submitting(self) -> bool:
        """True while any create or update awaits the remote service."""
        return self._submissions > 0

    def is_busy(self, product_id: int | None = None) -> bool:
        """True when ``product_id`` (or, for None, any record) is being changed.

        A fetch in flight makes every record busy.
        """
        if self._fetching:
            return True
        if product_id is None:
            return bool(self._in_flight)
        return product_id in self._in_flight

    @contextmanager
    def _mutation(self, product_id: int) -> Iterator[None]:
        if self._fetching:
            raise MutationInProgressError(None)
        if product_id in self._in_flight:
            raise MutationInProgressError(product_id)
        self._in_flight.add(product_id)
        try:
            yield
        finally:
            self._in_flight.discard(product_id)

    def _next_temporary_id(self) -> int:
        # microseconds since epoch, bumped so ids never repeat within a session
        candidate = self._clock() // 1000
        self._last_temporary_id = max(candidate, self._last_temporary_id + 1)
        return self._last_temporary_id

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Initial load; only the first call fetches."""
        if self._loaded:
            logger.debug("Catalog already loaded, skipping")
            return
        self._loaded = True
        await self._fetch()

    async def reload(self) -> None:
        """User-triggered refetch ("Try again"); replaces the list wholesale."""
        if self._in_flight or self._fetching:
            raise MutationInProgressError(None)
        self._loaded = True
        await self._fetch()

    async def _fetch(self) -> None:
        self._fetching = True
        self.is_loading = True
        self.error = None
        try:
            response = await self.gateway.get_all_products(self.page_size)
        except ApiError as e:
            self.error = e.message
            logger.error(f"Loading products failed: {e.message}")
            self.dialogs.error("Error Loading Products", e.message)
        else:
            self.products = list(response.products)
            self._close_stale_form()
            logger.info(f"Loaded {len(self.products)} products")
        finally:
            self._fetching = False
            self.is_loading = False

    # ------------------------------------------------------------------
    # Form
    # ------------------------------------------------------------------

    async def open_form(self, product: Product | None = None) -> ProductForm:
        form = ProductForm(product)
        self.form = form
        await form.load_categories(self.gateway)
        return form

    def close_form(self) -> None:
        self.form = None

    def _close_stale_form(self) -> None:
        # an edit form whose record left the list cannot be submitted
        editing = self.form.product if self.form is not None else None
        if editing is not None and self.get_product(editing.id) is None:
            logger.info(f"Closing edit form for product {editing.id}, no longer listed")
            self.close_form()

    async def submit(self, data: ProductFormData) -> None:
        """Update the product the form edits, or create a new one."""
        editing = self.form.product if self.form is not None else None
        if editing is not None:
            await self.update_product(editing, data)
        else:
            await self.create_product(data)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create_product(self, data: ProductFormData) -> Product | None:
        temporary_id = self._next_temporary_id()
        with self._mutation(temporary_id):
            speculative = Product(
                id=temporary_id,
                **data.model_dump(),
                thumbnail=self.placeholder_image,
                images=[self.placeholder_image],
            )
            self._submissions += 1
            self.products = [speculative, *self.products]
            self.close_form()
            try:
                created = await self.gateway.create_product(data)
            except ApiError as e:
                self.products = [p for p in self.products if p.id != temporary_id]
                logger.warning(f"Create rolled back for temporary id {temporary_id}: {e.message}")
                self.dialogs.error("Creation Failed", e.message)
                return None
            finally:
                self._submissions -= 1

            # the displayed record keeps its temporary id for the session
            server_fields = created.model_dump(exclude_unset=True, exclude={"id"})
            confirmed = speculative.model_copy(update=server_fields)
            self.products = [confirmed if p.id == temporary_id else p for p in self.products]
            logger.info(f"Created product (server id {created.id}, shown as {temporary_id})")
            self.dialogs.success(
                "Product Created!",
                "Your product has been successfully created.",
                self.notification_timer_ms,
            )
            return confirmed

    async def update_product(self, product: Product, data: ProductFormData) -> bool:
        with self._mutation(product.id):
            current = self.get_product(product.id)
            if current is None:
                raise ProductNotFoundError(product.id)
            snapshot = list(self.products)
            speculative = current.model_copy(update=data.model_dump())
            self._submissions += 1
            self.products = [speculative if p.id == product.id else p for p in self.products]
            self.close_form()
            try:
                # the response body is not used; the local merge stands
                await self.gateway.update_product(product.id, data)
            except ApiError as e:
                self.products = snapshot
                logger.warning(f"Update of product {product.id} rolled back: {e.message}")
                self.dialogs.error("Update Failed", e.message)
                return False
            finally:
                self._submissions -= 1

            logger.info(f"Updated product {product.id}")
            self.dialogs.success(
                "Product Updated!",
                "Your changes have been saved successfully.",
                self.notification_timer_ms,
            )
            return True

    async def delete_product(self, product: Product) -> bool:
        with self._mutation(product.id):
            confirmed = await self.dialogs.confirm(
                "Are you sure?",
                f"You are about to delete: {product.title}. This action cannot be undone.",
                confirm_label="Yes, delete it!",
                cancel_label="Cancel",
            )
            if not confirmed:
                logger.info(f"Deletion of product {product.id} cancelled")
                return False

            snapshot = list(self.products)
            self.products = [p for p in self.products if p.id != product.id]
            try:
                await self.gateway.delete_product(product.id)
            except ApiError as e:
                self.products = snapshot
                logger.warning(f"Delete of product {product.id} rolled back: {e.message}")
                self.dialogs.error("Deletion Failed", e.message)
                return False

            self._close_stale_form()
            logger.info(f"Deleted product {product.id}")
            self.dialogs.success(
                "Deleted!",
                "The product has been deleted successfully.",
                self.notification_timer_ms,
            )
            return True
