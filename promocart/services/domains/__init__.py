"""Domain services for the promotion catalog."""
from .bundles import BundleRecommendation, recommend_bundles
from .catalog import CatalogService, get_catalog_service

__all__ = [
    "BundleRecommendation",
    "CatalogService",
    "get_catalog_service",
    "recommend_bundles",
]
