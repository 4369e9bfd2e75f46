"""
Catalog Domain Service

Read-only access to promotion services and bundles for the cart UI.
Query failures are logged and surface as an empty catalog.
"""

from typing import List, Optional

from promocart.logging import get_logger, sanitize_string_for_logging
from promocart.services.models import PromotionBundle, PromotionService
from promocart.services.repositories import PromotionBundleRepository, PromotionServiceRepository

from .bundles import BundleRecommendation, recommend_bundles

logger = get_logger(__name__)


class CatalogService:
    """
    Catalog domain service.

    Provides:
    - Services by category
    - Active bundles
    - Bundle recommendations for a cart
    """

    def __init__(self, client):
        self.services = PromotionServiceRepository(client)
        self.bundles = PromotionBundleRepository(client)

    async def list_services(self, category: Optional[str] = None) -> List[PromotionService]:
        """Active services, optionally limited to one category."""
        try:
            if category:
                return await self.services.get_by_category(category)
            return await self.services.get_active()
        except Exception as e:
            logger.error(
                "Failed to load promotion services (category=%s): %s",
                sanitize_string_for_logging(category),
                type(e).__name__,
                exc_info=True,
            )
            return []

    async def get_service(self, service_id: str) -> Optional[PromotionService]:
        try:
            return await self.services.get_by_id(service_id)
        except Exception as e:
            logger.error("Failed to load promotion service: %s", type(e).__name__, exc_info=True)
            return None

    async def list_bundles(self) -> List[PromotionBundle]:
        try:
            return await self.bundles.get_active()
        except Exception as e:
            logger.error("Failed to load promotion bundles: %s", type(e).__name__, exc_info=True)
            return []

    async def recommend_for_cart(self, cart) -> List[BundleRecommendation]:
        """Bundle suggestions for a cart or facade (anything with entries and total_price)."""
        services = [entry.service for entry in cart.entries]
        if not services:
            return []
        return recommend_bundles(services, cart.total_price, await self.list_bundles())


# Singleton instance
_catalog_service: Optional[CatalogService] = None


async def get_catalog_service() -> CatalogService:
    """Get CatalogService singleton backed by the shared Supabase client."""
    global _catalog_service
    if _catalog_service is None:
        from promocart.db import get_supabase

        _catalog_service = CatalogService(await get_supabase())
    return _catalog_service
