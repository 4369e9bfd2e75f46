"""Catalog Models - Pydantic models for promotion catalog rows."""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, field_validator

from promocart.services.money import parse_price


class PromotionService(BaseModel):
    """Promotion service offered in the catalog (promotion_services row)."""
    id: str
    name: str
    category: str
    price: Decimal
    is_active: bool = True
    description: Optional[str] = None
    duration: Optional[str] = None
    features: List[str] = []
    image_url: Optional[str] = None
    sort_order: int = 0

    class Config:
        extra = "ignore"  # Ignore unknown columns from DB
        frozen = True  # Catalog rows are read-only to the cart

    @field_validator("price", mode="before")
    @classmethod
    def convert_price(cls, v):
        return parse_price(v)

    @field_validator("price")
    @classmethod
    def price_not_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("price must be non-negative")
        return v

    @field_validator("features", mode="before")
    @classmethod
    def normalize_features(cls, v):
        # JSON column, may be null or a newline-split list from the admin form
        if v is None:
            return []
        return [str(f) for f in v if str(f).strip()]


class PromotionBundle(BaseModel):
    """Bundle of promotion services sold at a single price."""
    id: str
    name: str
    slug: Optional[str] = None
    description: Optional[str] = None
    price: Decimal
    tier_level: int = 0
    target_description: Optional[str] = None
    image_url: Optional[str] = None
    included_services: List[PromotionService] = []
    is_active: bool = True

    class Config:
        extra = "ignore"

    @field_validator("price", mode="before")
    @classmethod
    def convert_price(cls, v):
        return parse_price(v)
