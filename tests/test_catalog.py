"""Tests for the promotion catalog and bundle recommendations"""
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from conftest import make_service
from promocart.services.domains import CatalogService, recommend_bundles
from promocart.services.models import PromotionBundle
from promocart.services.repositories import PromotionBundleRepository, PromotionServiceRepository


SERVICE_ROW = {
    "id": "svc1",
    "name": "Playlist Pitching",
    "category": "playlist",
    "description": "Pitch to curators",
    "price": 5000,
    "duration": "2 weeks",
    "features": ["10 curators", ""],
    "is_active": True,
    "sort_order": 1,
    "created_at": "2025-01-01T00:00:00Z",
    "updated_at": "2025-01-01T00:00:00Z",
}


def make_bundle(bundle_id: str, price, services, tier_level: int = 1) -> PromotionBundle:
    return PromotionBundle(
        id=bundle_id,
        name=f"Bundle {bundle_id}",
        price=price,
        tier_level=tier_level,
        included_services=services,
    )


@pytest.mark.asyncio
async def test_services_by_category(mock_supabase_client):
    """Test category query filters active services in display order"""
    table = mock_supabase_client.table.return_value
    table.execute.return_value = Mock(data=[SERVICE_ROW])

    services = await PromotionServiceRepository(mock_supabase_client).get_by_category("playlist")

    mock_supabase_client.table.assert_called_with("promotion_services")
    table.eq.assert_any_call("category", "playlist")
    table.eq.assert_any_call("is_active", True)
    table.order.assert_called_with("sort_order")
    assert services[0].price == Decimal("5000")
    assert services[0].features == ["10 curators"]


@pytest.mark.asyncio
async def test_service_by_id_missing(mock_supabase_client):
    assert await PromotionServiceRepository(mock_supabase_client).get_by_id("nope") is None


@pytest.mark.asyncio
async def test_active_bundles_join_services(mock_supabase_client):
    """Test bundles are returned with their included services"""
    table = mock_supabase_client.table.return_value
    table.execute = AsyncMock(side_effect=[
        Mock(data=[
            {"id": "b1", "name": "Starter", "price": 6000, "tier_level": 1, "is_active": True},
            {"id": "b2", "name": "Pro", "price": 20000, "tier_level": 2, "is_active": True},
        ]),
        Mock(data=[
            {"bundle_id": "b1", "promotion_services": SERVICE_ROW},
            {"bundle_id": "b2", "promotion_services": None},
        ]),
    ])

    bundles = await PromotionBundleRepository(mock_supabase_client).get_active()

    table.in_.assert_called_with("bundle_id", ["b1", "b2"])
    assert [b.id for b in bundles] == ["b1", "b2"]
    assert [s.id for s in bundles[0].included_services] == ["svc1"]
    assert bundles[1].included_services == []


@pytest.mark.asyncio
async def test_no_bundles_skips_join(mock_supabase_client):
    bundles = await PromotionBundleRepository(mock_supabase_client).get_active()

    assert bundles == []
    mock_supabase_client.table.return_value.in_.assert_not_called()


@pytest.mark.asyncio
async def test_catalog_service_swallows_query_errors(mock_supabase_client):
    """Test catalog failures surface as an empty list"""
    mock_supabase_client.table.return_value.execute = AsyncMock(side_effect=RuntimeError("offline"))
    catalog = CatalogService(mock_supabase_client)

    assert await catalog.list_services("playlist") == []
    assert await catalog.list_bundles() == []
    assert await catalog.get_service("svc1") is None


@pytest.mark.asyncio
async def test_catalog_recommends_for_cart(mock_supabase_client, facade, svc1, svc2):
    catalog = CatalogService(mock_supabase_client)
    catalog.list_bundles = AsyncMock(return_value=[make_bundle("b1", 6000, [svc1, svc2])])

    assert await catalog.recommend_for_cart(facade) == []

    await facade.add_to_cart(svc1)
    await facade.add_to_cart(svc2)
    [rec] = await catalog.recommend_for_cart(facade)

    assert rec.bundle.id == "b1"
    assert rec.savings == Decimal("2000")


class TestRecommendBundles:
    """Tests for recommend_bundles."""

    def test_empty_cart_has_no_recommendations(self, svc1):
        assert recommend_bundles([], Decimal("0"), [make_bundle("b1", 100, [svc1])]) == []

    def test_requires_overlap_and_savings(self, svc1, svc2, svc3):
        bundles = [
            make_bundle("no-overlap", 1000, [svc3]),
            make_bundle("too-expensive", 9000, [svc1]),
            make_bundle("break-even", 8000, [svc1]),
            make_bundle("good", 6000, [svc1, svc3]),
        ]

        recs = recommend_bundles([svc1, svc2], Decimal("8000"), bundles)

        assert [r.bundle.id for r in recs] == ["good"]
        rec = recs[0]
        assert rec.savings == Decimal("2000")
        assert [s.id for s in rec.matching_services] == ["svc1"]
        assert rec.match_percentage == Decimal("50.00")
        assert rec.total_services_value == Decimal("6500.50")

    def test_sorted_by_savings_and_capped(self, svc1, svc2):
        bundles = [
            make_bundle("b1", 7000, [svc1]),
            make_bundle("b2", 4000, [svc1]),
            make_bundle("b3", 5000, [svc2]),
        ]

        recs = recommend_bundles([svc1, svc2], Decimal("8000"), bundles)

        assert [r.bundle.id for r in recs] == ["b2", "b3"]

    def test_custom_limit(self, svc1):
        bundles = [make_bundle(f"b{i}", 1000 + i, [svc1]) for i in range(5)]

        assert len(recommend_bundles([svc1], Decimal("5000"), bundles, limit=4)) == 4
