"""
Promotion Cart - single source of truth for the cart contents.

- At most one entry per service id
- Totals derived from entries on every read
- Saved snapshot restored before the first mutation is applied
- Each mutation queues a write-through save; saves run in mutation order
  and never block or fail the mutation itself
"""

import asyncio
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from promocart.logging import get_logger, sanitize_id_for_logging
from promocart.services.models import PromotionService
from promocart.services.money import total

from .checkout import CheckoutSnapshot
from .models import CartEntry, utc_now
from .storage import CartStore

logger = get_logger(__name__)

CartListener = Callable[[Tuple[CartEntry, ...]], None]


class PromotionCart:
    """
    Cart State Container.

    Usage:
        cart = PromotionCart(CartStore(FileSlot(path)))
        await cart.start()
        await cart.add_service(service)
        cart.total_price, cart.item_count
        await cart.flush()  # before shutdown
    """

    def __init__(self, store: CartStore, clock: Callable = utc_now):
        self._store = store
        self._clock = clock
        self._entries: List[CartEntry] = []
        self._ready = asyncio.Event()
        self._start_lock = asyncio.Lock()
        self._save_lock = asyncio.Lock()
        self._pending: set[asyncio.Task] = set()
        self._listeners: List[CartListener] = []

    # ---- lifecycle ----

    @property
    def is_loaded(self) -> bool:
        return self._ready.is_set()

    async def start(self) -> None:
        """Restore the saved cart, replacing in-memory entries. Idempotent."""
        if self._ready.is_set():
            return
        async with self._start_lock:
            if self._ready.is_set():
                return
            self._entries = list(await self._store.load())
            self._ready.set()
            logger.info("Cart restored with %d entries", len(self._entries))
        self._notify()

    async def flush(self) -> None:
        """Wait until every queued save has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ---- reads ----

    @property
    def entries(self) -> Tuple[CartEntry, ...]:
        return tuple(self._entries)

    @property
    def total_price(self) -> Decimal:
        return total(entry.service.price for entry in self._entries)

    @property
    def item_count(self) -> int:
        return len(self._entries)

    def is_in_cart(self, service_id: str) -> bool:
        return any(entry.service_id == service_id for entry in self._entries)

    def get_entry(self, service_id: str) -> Optional[CartEntry]:
        return next((entry for entry in self._entries if entry.service_id == service_id), None)

    def snapshot(self) -> CheckoutSnapshot:
        return CheckoutSnapshot.from_entries(self._entries)

    # ---- mutations ----

    async def add_service(self, service: PromotionService) -> bool:
        """
        Add a service unless it is already in the cart.

        Returns:
            True if a new entry was appended, False if the id was present
        """
        await self.start()

        if self.is_in_cart(service.id):
            return False

        self._entries.append(CartEntry(service=service, added_at=self._clock()))
        logger.debug("Added service %s to cart", sanitize_id_for_logging(service.id))
        self._changed()
        return True

    async def remove_service(self, service_id: str) -> bool:
        """
        Remove the entry for service_id if present.

        Returns:
            True if an entry was removed
        """
        await self.start()

        remaining = [entry for entry in self._entries if entry.service_id != service_id]
        removed = len(remaining) != len(self._entries)
        self._entries = remaining
        if removed:
            logger.debug("Removed service %s from cart", sanitize_id_for_logging(service_id))
        # The stored snapshot is rewritten even when nothing matched
        self._changed()
        return removed

    async def clear(self) -> None:
        """Empty the cart unconditionally."""
        await self.start()

        self._entries = []
        logger.debug("Cart cleared")
        self._changed()

    # ---- observers ----

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Register a callback invoked with the entries after every change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- internals ----

    def _changed(self) -> None:
        self._notify()
        self._schedule_save()

    def _notify(self) -> None:
        entries = self.entries
        for listener in list(self._listeners):
            try:
                listener(entries)
            except Exception:
                # A broken UI subscriber must not undo an applied mutation
                logger.error("Cart listener %r failed", listener, exc_info=True)

    def _schedule_save(self) -> None:
        # Fire-and-forget; store reference to prevent premature garbage collection
        task = asyncio.create_task(self._save(self.entries))
        self._pending.add(task)
        task.add_done_callback(self._save_done)

    async def _save(self, entries: Tuple[CartEntry, ...]) -> bool:
        # asyncio.Lock is FIFO, so snapshots land in mutation order
        async with self._save_lock:
            return await self._store.save(entries)

    def _save_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Unexpected error while saving cart", exc_info=error)
