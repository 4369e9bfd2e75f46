"""
Cart Facade - the interface UI code uses to read and change the cart.

Wraps PromotionCart mutations with toasts and refuses to run once its cart
is gone (never bound, or the session was closed).
"""

from decimal import Decimal
from typing import Optional, Tuple

from promocart.errors import CartContextError
from promocart.logging import get_logger
from promocart.services.models import PromotionService
from promocart.services.notifications import NotificationService

from .checkout import CheckoutSnapshot
from .container import PromotionCart
from .models import CartEntry

logger = get_logger(__name__)


class CartFacade:
    """
    Cart Access Facade.

    Usage:
        facade = CartFacade(cart, NotificationService(BufferedToastChannel()))
        await facade.add_to_cart(service)
        facade.item_count, facade.total_price
    """

    def __init__(self, cart: Optional[PromotionCart], notifications: Optional[NotificationService] = None):
        self._cart = cart
        self.notifications = notifications if notifications is not None else NotificationService()

    @property
    def is_active(self) -> bool:
        return self._cart is not None

    def detach(self) -> None:
        """Unbind the cart; every later call raises CartContextError."""
        self._cart = None

    @property
    def cart(self) -> PromotionCart:
        """Bound cart, or CartContextError outside an active session."""
        if self._cart is None:
            raise CartContextError()
        return self._cart

    # ---- mutations ----

    async def add_to_cart(self, service: PromotionService) -> bool:
        """Add a service, or tell the user it is already there.

        Returns:
            True if the service was added
        """
        cart = self.cart
        await cart.start()

        if cart.is_in_cart(service.id):
            self.notifications.notify_already_in_cart(service.name)
            return False

        added = await cart.add_service(service)
        self.notifications.notify_added(service.name)
        return added

    async def remove_from_cart(self, service_id: str) -> bool:
        """Remove a service. The toast is shown even if it was not in the cart.

        Returns:
            True if an entry was removed
        """
        cart = self.cart
        await cart.start()

        entry = cart.get_entry(service_id)
        removed = await cart.remove_service(service_id)
        self.notifications.notify_removed(entry.service.name if entry else None)
        return removed

    async def clear_cart(self) -> None:
        cart = self.cart
        await cart.clear()
        self.notifications.notify_cleared()

    # ---- reads ----

    @property
    def entries(self) -> Tuple[CartEntry, ...]:
        return self.cart.entries

    @property
    def total_price(self) -> Decimal:
        return self.cart.total_price

    @property
    def item_count(self) -> int:
        return self.cart.item_count

    def is_in_cart(self, service_id: str) -> bool:
        return self.cart.is_in_cart(service_id)

    def checkout_snapshot(self) -> CheckoutSnapshot:
        """Hand the current contents to campaign creation."""
        snapshot = self.cart.snapshot()
        if snapshot.is_empty:
            logger.warning("Checkout snapshot taken from an empty cart")
            return snapshot
        logger.info(
            "Checkout snapshot taken: %d services, total %s",
            snapshot.item_count,
            snapshot.total_price,
        )
        return snapshot
