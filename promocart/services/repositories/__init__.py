"""Repositories for the promotion catalog tables."""
from .base import BaseRepository
from .promotion_repo import PromotionBundleRepository, PromotionServiceRepository

__all__ = [
    "BaseRepository",
    "PromotionBundleRepository",
    "PromotionServiceRepository",
]
