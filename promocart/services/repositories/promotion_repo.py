"""Promotion Repository - read-only catalog of services and bundles."""
from typing import Dict, List, Optional

from .base import BaseRepository
from promocart.services.models import PromotionBundle, PromotionService


class PromotionServiceRepository(BaseRepository):
    """promotion_services table."""

    async def get_by_category(self, category: str) -> List[PromotionService]:
        """Active services in a category, in display order."""
        result = (
            await self.client.table("promotion_services")
            .select("*")
            .eq("category", category)
            .eq("is_active", True)
            .order("sort_order")
            .execute()
        )
        return [PromotionService(**row) for row in result.data or []]

    async def get_active(self) -> List[PromotionService]:
        """All active services, in display order."""
        result = (
            await self.client.table("promotion_services")
            .select("*")
            .eq("is_active", True)
            .order("sort_order")
            .execute()
        )
        return [PromotionService(**row) for row in result.data or []]

    async def get_by_id(self, service_id: str) -> Optional[PromotionService]:
        result = (
            await self.client.table("promotion_services")
            .select("*")
            .eq("id", service_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return PromotionService(**result.data[0])


class PromotionBundleRepository(BaseRepository):
    """promotion_bundles table joined with bundle_services."""

    async def get_active(self) -> List[PromotionBundle]:
        """Active bundles ordered by tier, each with its included services."""
        bundles = (
            await self.client.table("promotion_bundles")
            .select("*")
            .eq("is_active", True)
            .order("tier_level")
            .execute()
        )
        rows = bundles.data or []
        if not rows:
            return []

        links = (
            await self.client.table("bundle_services")
            .select("bundle_id, promotion_services (*)")
            .in_("bundle_id", [row["id"] for row in rows])
            .execute()
        )

        services_by_bundle: Dict[str, List[PromotionService]] = {}
        for link in links.data or []:
            service = link.get("promotion_services")
            if not service:
                continue
            services_by_bundle.setdefault(link["bundle_id"], []).append(PromotionService(**service))

        return [
            PromotionBundle(**row, included_services=services_by_bundle.get(row["id"], []))
            for row in rows
        ]
