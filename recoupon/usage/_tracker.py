"""
Limited-use tracker.

Counts the payments a limited recurring coupon actually discounted and
decides when it leaves the subscription.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from recoupon._log import get_logger
from recoupon._types import Code
from recoupon.config import DEFAULT_REFUND_TOLERANCE, Settings
from recoupon.usage._repository import CouponRepository, coupon_limit
from recoupon.usage._types import (
    OrderRecord,
    Retirement,
    RetirementPlan,
    SubscriptionSnapshot,
)

log = get_logger("usage")

# ═══════════════════════════════════════════════════════════════════════════════
# Order Predicates
# ═══════════════════════════════════════════════════════════════════════════════


def is_fully_refunded(
    order: OrderRecord, tolerance: Decimal = DEFAULT_REFUND_TOLERANCE
) -> bool:
    """
    Refunded order: a refund exists and it equals the total.

    Equality within tolerance, not "refunded >= something".
    """
    if order.total_refunded is None:
        return False
    return abs(order.total - order.total_refunded) <= tolerance


def counts_as_payment(
    order: OrderRecord, tolerance: Decimal = DEFAULT_REFUND_TOLERANCE
) -> bool:
    """Paid, not refunded, and something was actually discounted."""
    if order.needs_payment:
        return False
    if is_fully_refunded(order, tolerance):
        return False
    return order.discount_total != 0


# ═══════════════════════════════════════════════════════════════════════════════
# compute_usage() / decide_retirement()
# ═══════════════════════════════════════════════════════════════════════════════


def compute_usage(
    history: Iterable[OrderRecord],
    limited_codes: Iterable[Code],
    *,
    refund_tolerance: Decimal = DEFAULT_REFUND_TOLERANCE,
) -> dict[Code, int]:
    """
    Count usages per limited code over the related orders.

    A coupon line only counts if its own discount is non-zero.

    Example:
        compute_usage(orders, {"FIRST3"})  # {"FIRST3": 2}
    """
    counts: dict[Code, int] = {code: 0 for code in limited_codes}

    for order in history:
        if not counts_as_payment(order, refund_tolerance):
            continue
        for line in order.coupons:
            if line.code in counts and line.discount != 0:
                counts[line.code] += 1

    return counts


def decide_retirement(count: int, limit: int) -> bool:
    """Limit 0 is unlimited; otherwise retire once count reaches limit."""
    return limit != 0 and count >= limit


# ═══════════════════════════════════════════════════════════════════════════════
# check_coupon_usages() — After a Renewal Payment
# ═══════════════════════════════════════════════════════════════════════════════


def _limited_codes(
    repository: CouponRepository, codes: Sequence[Code]
) -> dict[Code, int]:
    limits: dict[Code, int] = {}
    for code in codes:
        limit = coupon_limit(repository, code)
        if limit:
            limits[code] = limit
    return limits


def check_coupon_usages(
    subscription: SubscriptionSnapshot,
    repository: CouponRepository,
    *,
    settings: Settings | None = None,
) -> RetirementPlan:
    """
    Decide which limited coupons leave the subscription.

    Called after a subscription payment completes. Only coupons with a
    non-zero payment limit are tracked.

    Returns:
        RetirementPlan. The host removes plan.codes and records plan.notes.
    """
    tolerance = settings.refund_tolerance if settings else DEFAULT_REFUND_TOLERANCE
    limits = _limited_codes(repository, subscription.used_coupon_codes)

    if not limits:
        return RetirementPlan(subscription.subscription_id, (), ())

    counts = compute_usage(
        subscription.related_orders,
        limits,
        refund_tolerance=tolerance,
    )

    retirements: list[Retirement] = []
    for code, count in counts.items():
        if decide_retirement(count, limits[code]):
            retirement = Retirement(code=code, count=count, limit=limits[code])
            log.info(
                "subscription %s: %s",
                subscription.subscription_id,
                retirement.note,
            )
            retirements.append(retirement)

    return RetirementPlan(
        subscription_id=subscription.subscription_id,
        usage=tuple(counts.items()),
        retirements=tuple(retirements),
    )


__all__ = (
    "is_fully_refunded",
    "counts_as_payment",
    "compute_usage",
    "decide_retirement",
    "check_coupon_usages",
)
