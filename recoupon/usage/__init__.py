"""
Usage — limited-use recurring coupons.

    from recoupon import usage as U

    plan = U.check_coupon_usages(
        U.SubscriptionSnapshot(
            subscription_id=77,
            used_coupon_codes=("FIRST3",),
            related_orders=orders,
        ),
        repository,
    )
    for code, note in zip(plan.codes, plan.notes):
        subscription.remove_coupon(code)
        subscription.add_note(note)

An order counts as one payment for a coupon when:

    paid  ∧  not fully refunded  ∧  discount_total ≠ 0  ∧  coupon discount ≠ 0
"""

from recoupon.usage._types import (
    CouponLine,
    OrderRecord,
    SubscriptionSnapshot,
    Retirement,
    RetirementPlan,
)
from recoupon.usage._repository import (
    CouponRepository,
    MemoryCouponRepository,
    coupon_limit,
    coupon_is_limited,
    cart_contains_limited_recurring_coupon,
    order_has_limited_recurring_coupon,
)
from recoupon.usage._tracker import (
    is_fully_refunded,
    counts_as_payment,
    compute_usage,
    decide_retirement,
    check_coupon_usages,
)

__all__ = (
    # Types
    "CouponLine",
    "OrderRecord",
    "SubscriptionSnapshot",
    "Retirement",
    "RetirementPlan",
    # Repository
    "CouponRepository",
    "MemoryCouponRepository",
    "coupon_limit",
    "coupon_is_limited",
    "cart_contains_limited_recurring_coupon",
    "order_has_limited_recurring_coupon",
    # Tracker
    "is_fully_refunded",
    "counts_as_payment",
    "compute_usage",
    "decide_retirement",
    "check_coupon_usages",
)
