"""Pytest configuration and fixtures"""
import os
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock

import pytest

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")

from promocart.cart import CartFacade, CartStore, MemorySlot, PromotionCart
from promocart.services.models import PromotionService
from promocart.services.notifications import BufferedToastChannel, NotificationService


def make_service(service_id: str, price, **overrides) -> PromotionService:
    """Build a catalog row the way promotion_services returns it."""
    data = {
        "id": service_id,
        "name": f"Service {service_id}",
        "category": "playlist",
        "price": price,
        "is_active": True,
    }
    data.update(overrides)
    return PromotionService(**data)


class StepClock:
    """Deterministic clock: each call is one second after the previous."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def svc1():
    return make_service("svc1", 5000, name="Playlist Pitching")


@pytest.fixture
def svc2():
    return make_service("svc2", 3000, name="TikTok Campaign", category="social")


@pytest.fixture
def svc3():
    return make_service("svc3", "1500.50", name="Blog Feature", category="press")


@pytest.fixture
def memory_slot():
    return MemorySlot()


@pytest.fixture
def store(memory_slot):
    return CartStore(memory_slot)


@pytest.fixture
def cart(store):
    return PromotionCart(store, clock=StepClock())


@pytest.fixture
def toasts():
    return BufferedToastChannel()


@pytest.fixture
def facade(cart, toasts):
    return CartFacade(cart, NotificationService(toasts))


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client; execute() is awaited."""
    client = Mock()

    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.in_.return_value = table_mock
    table_mock.order.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.execute = AsyncMock(return_value=Mock(data=[]))

    client.table.return_value = table_mock
    return client
