"""
Order rules — hard failure.

Used when a coupon is applied to an existing order or subscription.
"""

from __future__ import annotations

from kungfu import Result, Ok, Error

from recoupon._log import get_logger
from recoupon.eligibility._types import (
    CouponRejected,
    InvalidReason,
    OrderContext,
    Relation,
)
from recoupon.pricing import Coupon

log = get_logger("eligibility")

RECURRING_NEEDS_SUBSCRIPTION = (
    "Sorry, recurring coupons can only be applied to subscriptions or "
    "subscription orders."
)
SIGN_UP_NEEDS_PARENT_ORDER = (
    'Sorry, "{code}" can only be applied to subscription parent orders which '
    "contain a product with signup fees."
)
SUBSCRIPTION_NEEDS_RECURRING = (
    "Sorry, only recurring coupons can be applied to subscriptions."
)


def validate_for_order(
    coupon: Coupon, order: OrderContext
) -> Result[Coupon, CouponRejected]:
    """
    Check whether a coupon may apply to an order or subscription.

    An Error here is fatal for the apply-coupon action; validate() raises it.
    """
    kind = coupon.kind
    rejected: CouponRejected | None = None

    if kind.is_recurring and not (
        order.is_subscription or order.order_contains_subscription(Relation.ANY)
    ):
        rejected = CouponRejected(
            coupon.code,
            InvalidReason.RECURRING_NEEDS_SUBSCRIPTION,
            RECURRING_NEEDS_SUBSCRIPTION,
        )
    elif kind.is_sign_up and not (
        order.order_contains_subscription(Relation.PARENT)
        or order.sign_up_fee_total != 0
    ):
        rejected = CouponRejected(
            coupon.code,
            InvalidReason.SIGN_UP_NEEDS_PARENT_ORDER,
            SIGN_UP_NEEDS_PARENT_ORDER.format(code=coupon.code),
        )
    elif not kind.is_recurring and order.is_subscription:
        rejected = CouponRejected(
            coupon.code,
            InvalidReason.SUBSCRIPTION_NEEDS_RECURRING,
            SUBSCRIPTION_NEEDS_RECURRING,
        )

    if rejected is None:
        return Ok(coupon)

    log.info("coupon %s rejected for order: %s", coupon.code, rejected.reason.name)
    return Error(rejected)


__all__ = (
    "validate_for_order",
    "RECURRING_NEEDS_SUBSCRIPTION",
    "SIGN_UP_NEEDS_PARENT_ORDER",
    "SUBSCRIPTION_NEEDS_RECURRING",
)
