"""
Bundle Recommendations

Suggests bundles that cover services already in the cart for less than the
cart currently costs.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Sequence

from promocart.services.models import PromotionBundle, PromotionService
from promocart.services.money import round_money, to_decimal, total

MAX_RECOMMENDATIONS = 2


@dataclass
class BundleRecommendation:
    """A bundle and how it compares with the current cart."""

    bundle: PromotionBundle
    matching_services: List[PromotionService]
    match_percentage: Decimal
    savings: Decimal
    total_services_value: Decimal


def recommend_bundles(
    cart_services: Sequence[PromotionService],
    cart_total: Decimal,
    bundles: Iterable[PromotionBundle],
    limit: int = MAX_RECOMMENDATIONS,
) -> List[BundleRecommendation]:
    """
    Rank bundles against the cart.

    A bundle qualifies when it includes at least one service from the cart
    and its price is below the cart total. Results are ordered by savings,
    highest first, and capped at limit.

    Args:
        cart_services: Services currently in the cart
        cart_total: Current cart total
        bundles: Candidate bundles
        limit: Maximum number of recommendations

    Returns:
        List of BundleRecommendation
    """
    if not cart_services:
        return []

    cart_total = to_decimal(cart_total)
    cart_ids = {service.id for service in cart_services}
    recommendations: List[BundleRecommendation] = []

    for bundle in bundles:
        included = bundle.included_services
        matching = [service for service in included if service.id in cart_ids]
        if not matching:
            continue

        savings = cart_total - bundle.price
        if savings <= 0:
            continue

        match_percentage = round_money(Decimal(len(matching)) * 100 / Decimal(len(included)))
        recommendations.append(
            BundleRecommendation(
                bundle=bundle,
                matching_services=matching,
                match_percentage=match_percentage,
                savings=savings,
                total_services_value=total(service.price for service in included),
            )
        )

    # sorted() is stable: equal savings keep tier order
    recommendations = sorted(recommendations, key=lambda rec: rec.savings, reverse=True)
    return recommendations[:limit]
