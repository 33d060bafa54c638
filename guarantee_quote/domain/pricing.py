"""Guarantee fee pricing - duration multiplier and coupon discount"""

from typing import Dict, Optional
from guarantee_quote.domain.coupons import CouponStore
from guarantee_quote.domain.models import Quote
from guarantee_quote.utils.numbers import round_half_away

DEFAULT_DURATION_MONTHS = 12

# Contract length in months -> fraction of one month's rent+fees charged as fee
DURATION_MULTIPLIERS: Dict[int, float] = {
    12: 0.8,
    24: 1.5,
    36: 1.75,
}

INVALID_COUPON_MESSAGE = "Invalid or exhausted coupon"


def duration_multiplier(duration: int) -> float:
    """Multiplier for a contract length; unknown lengths are priced as 12 months"""
    return DURATION_MULTIPLIERS.get(duration, DURATION_MULTIPLIERS[DEFAULT_DURATION_MONTHS])


def apply_discount(cost: int, percent: int) -> int:
    """Apply a percentage discount to an already rounded cost"""
    if percent <= 0:
        return cost
    return round_half_away(cost * (1 - percent / 100))


def compute_cost(
    duration: int,
    monthly_rent: float,
    monthly_fees: float,
    coupon_code: Optional[str] = None,
    store: Optional[CouponStore] = None,
) -> Quote:
    """
    Price a rental guarantee.

    Steps:
    1. original = round((rent + fees) * multiplier)
    2. If a coupon code is given, redeem it (consumes one use on success)
    3. discounted = round(original * (1 - percent / 100))

    The original cost is rounded before the discount is applied; the two
    rounding stages are part of the quoted amounts and must not be merged.

    Example:
        12 months, rent 1000, fees 200, 10% coupon
        original = round(1200 * 0.8) = 960
        discounted = round(960 * 0.9) = 864
    """
    multiplier = duration_multiplier(duration)
    original_cost = round_half_away((monthly_rent + monthly_fees) * multiplier)

    discount_percent = 0
    discount_message = ""
    if coupon_code:
        result = store.redeem(coupon_code) if store is not None else None
        if result is not None and result.applied:
            discount_percent = result.percent
            discount_message = f"Coupon applied: {coupon_code} ({discount_percent}% discount)"
        else:
            discount_message = INVALID_COUPON_MESSAGE

    return Quote(
        original_cost=original_cost,
        discounted_cost=apply_discount(original_cost, discount_percent),
        discount_percent=discount_percent,
        discount_message=discount_message,
    )
