"""
Pass plan — which applied coupons take part in a totals pass.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from recoupon._types import Code, Money, ZERO
from recoupon.pricing import CalculationPhase, Coupon
from recoupon.usage import CouponRepository, coupon_limit


@dataclass(frozen=True, slots=True)
class PassPlan:
    """Coupons kept for the pass and coupons left out of it."""

    kept: tuple[Coupon, ...]
    removed: tuple[Coupon, ...]

    @property
    def removed_codes(self) -> tuple[Code, ...]:
        return tuple(c.code for c in self.removed)


def coupons_for_pass(
    applied: Iterable[Coupon],
    phase: CalculationPhase,
    *,
    cart_contains_subscription: bool,
    discount_totals: Mapping[Code, Money] | None = None,
    repository: CouponRepository | None = None,
) -> PassPlan:
    """
    Split applied coupons for the current pass.

    Only the recurring pass drops anything:
      - non-recurring kinds never discount future periods
      - a recurring coupon limited to 1 payment that already discounted the
        initial total is spent

    Args:
        discount_totals: Per-code discount from the initial pass
        repository: Limit lookup. Falls back to the coupon's own limit.
    """
    applied = tuple(applied)
    if phase is not CalculationPhase.RECURRING_TOTAL or not cart_contains_subscription:
        return PassPlan(kept=applied, removed=())

    totals = discount_totals or {}
    kept: list[Coupon] = []
    removed: list[Coupon] = []

    for coupon in applied:
        if not coupon.kind.is_recurring:
            removed.append(coupon)
            continue

        if repository is not None:
            limit = coupon_limit(repository, coupon.code)
        else:
            limit = coupon.usage_limit_payments
        if limit == 1 and totals.get(coupon.code, ZERO) > 0:
            removed.append(coupon)
            continue

        kept.append(coupon)

    return PassPlan(kept=tuple(kept), removed=tuple(removed))


__all__ = ("PassPlan", "coupons_for_pass")
