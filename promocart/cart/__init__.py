"""Cart package: models, storage, state container, facade and sessions."""
from .checkout import CheckoutSnapshot
from .container import PromotionCart
from .facade import CartFacade
from .models import CartEntry
from .session import CartSessionFactory, get_session_factory
from .storage import CartStore, FileSlot, MemorySlot, RedisSlot, build_slot

__all__ = [
    "CartEntry",
    "CartFacade",
    "CartSessionFactory",
    "CartStore",
    "CheckoutSnapshot",
    "FileSlot",
    "MemorySlot",
    "PromotionCart",
    "RedisSlot",
    "build_slot",
    "get_session_factory",
]
