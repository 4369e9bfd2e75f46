"""
Cart Sessions - exactly one cart per active user session.

UI code receives the CartFacade from open() and passes it along explicitly;
there is no ambient lookup. close() flushes pending saves and detaches the
facade so stale references fail loudly.
"""

import asyncio
import re
from typing import Callable, Dict, Optional

from promocart.errors import ERROR_SESSION_NOT_FOUND, CartContextError
from promocart.logging import get_logger, sanitize_id_for_logging
from promocart.services.notifications import NotificationService

from .config import CART_STORAGE_KEY
from .container import PromotionCart
from .facade import CartFacade
from .storage import CartStore, build_slot

logger = get_logger(__name__)

StoreFactory = Callable[[str], CartStore]

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def slot_key_for(user_id: str) -> str:
    """Storage key for a user's cart, safe to use as a file name."""
    return f"{CART_STORAGE_KEY}-{_UNSAFE_KEY_CHARS.sub('_', str(user_id))}"


def default_store_factory(user_id: str) -> CartStore:
    return CartStore(build_slot(), key=slot_key_for(user_id))


class CartSessionFactory:
    """
    Session-scoped cart factory.

    Usage:
        sessions = CartSessionFactory()
        cart = await sessions.open(user_id)
        ...
        await sessions.close(user_id)
    """

    def __init__(
        self,
        store_factory: StoreFactory = default_store_factory,
        notifications_factory: Callable[[], NotificationService] = NotificationService,
    ):
        self._store_factory = store_factory
        self._notifications_factory = notifications_factory
        self._sessions: Dict[str, CartFacade] = {}
        self._lock = asyncio.Lock()

    async def open(self, user_id: str) -> CartFacade:
        """Return the user's active cart, creating and loading it if needed."""
        async with self._lock:
            facade = self._sessions.get(user_id)
            if facade is None:
                cart = PromotionCart(self._store_factory(user_id))
                facade = CartFacade(cart, self._notifications_factory())
                self._sessions[user_id] = facade
                logger.info("Cart session opened for user %s", sanitize_id_for_logging(user_id))
        await facade.cart.start()
        return facade

    def get(self, user_id: str) -> CartFacade:
        """Active cart for user_id.

        Raises:
            CartContextError: If no session is open for the user
        """
        facade = self._sessions.get(user_id)
        if facade is None:
            raise CartContextError(ERROR_SESSION_NOT_FOUND)
        return facade

    def is_open(self, user_id: str) -> bool:
        return user_id in self._sessions

    async def close(self, user_id: str) -> None:
        """Flush the user's pending saves and end the session. No-op if not open.

        Holds the factory lock until the flush lands, so an open() for the
        same user loads the final snapshot instead of racing the last save.
        """
        async with self._lock:
            facade = self._sessions.pop(user_id, None)
            if facade is None:
                return
            await facade.cart.flush()
            facade.detach()
        logger.info("Cart session closed for user %s", sanitize_id_for_logging(user_id))

    async def close_all(self) -> None:
        for user_id in list(self._sessions):
            await self.close(user_id)


# Singleton instance
_session_factory: Optional[CartSessionFactory] = None


def get_session_factory() -> CartSessionFactory:
    """Get CartSessionFactory singleton."""
    global _session_factory
    if _session_factory is None:
        _session_factory = CartSessionFactory()
    return _session_factory
