"""
validate() — one entry point for both contexts.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal, assert_never

from kungfu import Result, Ok, Error

from recoupon.eligibility._types import (
    CartContext,
    Context,
    CouponInvalid,
    OrderContext,
)
from recoupon.eligibility._cart import validate_for_cart
from recoupon.eligibility._order import validate_for_order
from recoupon.pricing import Coupon
from recoupon.taxonomy import CouponKind

# ═══════════════════════════════════════════════════════════════════════════════
# validate() — Dispatch by Context
# ═══════════════════════════════════════════════════════════════════════════════


def validate(coupon: Coupon, context: Context) -> Result[Coupon, CouponInvalid]:
    """
    Validate a coupon against a cart or an order.

    Cart violations come back as Error(CouponInvalid); try another coupon.
    Order violations raise CouponRejected; abort the apply-coupon action.

    Example:
        try:
            result = V.validate(coupon, V.OrderContext(is_subscription=True))
        except V.CouponRejected as e:
            return admin_error(e.message)
    """
    match context:
        case CartContext():
            return validate_for_cart(coupon, context)
        case OrderContext():
            match validate_for_order(coupon, context):
                case Ok(valid):
                    return Ok(valid)
                case Error(rejected):
                    raise rejected
        case _:
            assert_never(context)


# ═══════════════════════════════════════════════════════════════════════════════
# cart_contains_discount() — Query Applied Coupons
# ═══════════════════════════════════════════════════════════════════════════════

type KindQuery = CouponKind | Literal["any", "core"]


def cart_contains_discount(
    applied: Iterable[Coupon],
    kind: KindQuery = "any",
) -> bool:
    """
    Whether any applied coupon matches the query.

    "any" matches every coupon, "core" matches non-subscription kinds,
    a CouponKind matches that kind only.
    """
    for coupon in applied:
        if kind == "any" or kind is coupon.kind:
            return True
        if kind == "core" and coupon.kind.is_core:
            return True
    return False


__all__ = ("validate", "cart_contains_discount", "KindQuery")
