"""
Purchase Analyzer — ownership-cost metrics for a single purchase

Simple interface:
    analyze(purchase, all_purchases) -> PurchaseAnalysis

Computes cost per use, total cost of ownership and a daily equivalent,
then merges bias warnings from bias_detector with its own cost-based
warnings and recommendations.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from bias_detector import detect_for_purchase
from config import DAYS_PER_YEAR, DEFAULT_USES_PER_YEAR, PURCHASE_THRESHOLDS, USES_PER_YEAR
from models import Purchase, PurchaseAnalysis, UsageFrequency

logger = logging.getLogger(__name__)


def uses_per_year(frequency: Optional[UsageFrequency]) -> int:
    if frequency is None:
        return DEFAULT_USES_PER_YEAR
    return USES_PER_YEAR.get(frequency.value, DEFAULT_USES_PER_YEAR)


def cost_per_use(purchase: Purchase) -> float:
    """Price amortized over every expected use; raw price when that can't be known."""
    if not purchase.expected_lifespan_years or purchase.usage_frequency is None:
        return purchase.price
    total_uses = uses_per_year(purchase.usage_frequency) * purchase.expected_lifespan_years
    if total_uses <= 0:
        return purchase.price
    return purchase.price / total_uses


def lifetime_maintenance(purchase: Purchase) -> float:
    if not purchase.maintenance_cost_per_year or not purchase.expected_lifespan_years:
        return 0.0
    return purchase.maintenance_cost_per_year * purchase.expected_lifespan_years


def total_cost_of_ownership(purchase: Purchase) -> float:
    return purchase.price + lifetime_maintenance(purchase)


def daily_equivalent(purchase: Purchase) -> float:
    # no lifespan: spread the price over a nominal single year
    if not purchase.expected_lifespan_years:
        return purchase.price / DAYS_PER_YEAR
    return total_cost_of_ownership(purchase) / (purchase.expected_lifespan_years * DAYS_PER_YEAR)


def analyze(
    purchase: Purchase,
    all_purchases: Iterable[Purchase],
    now: Optional[datetime] = None,
) -> PurchaseAnalysis:
    per_use = cost_per_use(purchase)
    tco = total_cost_of_ownership(purchase)
    daily = daily_equivalent(purchase)

    warnings = list(detect_for_purchase(purchase, all_purchases, now=now))
    recommendations = []
    t = PURCHASE_THRESHOLDS

    if per_use > purchase.price * t["cost_per_use_price_share"]:
        warnings.append("High cost per use. Consider renting or an alternative.")

    if purchase.usage_frequency is UsageFrequency.RARELY and purchase.price > t["rare_use_min_price"]:
        warnings.append("Expensive purchase that will rarely be used. Consider renting.")
        recommendations.append(
            f"Renting may be cheaper. Compare rental costs against {purchase.price:.2f}")

    alternative = purchase.alternative_cost
    if alternative and alternative < purchase.price * t["alternative_price_share"]:
        recommendations.append(
            f"The alternative could save {purchase.price - alternative:.2f}")

    maintenance = lifetime_maintenance(purchase)
    if maintenance > purchase.price * t["maintenance_price_share"]:
        warnings.append(
            f"Maintenance over the lifespan ({maintenance:.2f}) is more than 50% of the price.")

    lifespan = purchase.expected_lifespan_years
    if daily > t["daily_equivalent_max"] and lifespan and lifespan < t["short_lifespan_years"]:
        recommendations.append("Look for more durable options to lower the daily cost.")

    logger.info(f"Analyzed purchase {purchase.id}: TCO={tco:.2f} per_use={per_use:.2f} "
                f"daily={daily:.2f} warnings={len(warnings)}")

    return PurchaseAnalysis(
        purchase_id=purchase.id,
        cost_per_use=per_use,
        total_cost_of_ownership=tco,
        daily_equivalent=daily,
        warnings=warnings,
        recommendations=recommendations,
    )
