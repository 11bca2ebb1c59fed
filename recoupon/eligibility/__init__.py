"""
Eligibility — may this coupon apply here at all?

    from recoupon import eligibility as V

    # Cart: soft, returns Result
    match V.validate(coupon, V.CartContext(contains_subscription=True)):
        case Ok(_):
            ...
        case Error(invalid):
            notice(invalid.message)

    # Order: hard, raises CouponRejected
    V.validate(coupon, V.OrderContext(is_subscription=True))

Two tiers:

    CartContext  ──► validate_for_cart  ──► Error(CouponInvalid)    (recoverable)
    OrderContext ──► validate_for_order ──► Error(CouponRejected)   (raised by validate)
"""

from recoupon.eligibility._types import (
    CartContext,
    OrderContext,
    Relation,
    Context,
    InvalidReason,
    CouponInvalid,
    CouponRejected,
)
from recoupon.eligibility._cart import (
    validate_for_cart,
    NO_INITIAL_PAYMENT,
    NEW_SUBSCRIPTIONS_ONLY,
    SUBSCRIPTION_PRODUCTS_ONLY,
    RENEWALS_ONLY,
    SIGN_UP_FEE_REQUIRED,
)
from recoupon.eligibility._order import (
    validate_for_order,
    RECURRING_NEEDS_SUBSCRIPTION,
    SIGN_UP_NEEDS_PARENT_ORDER,
    SUBSCRIPTION_NEEDS_RECURRING,
)
from recoupon.eligibility._validate import (
    validate,
    cart_contains_discount,
    KindQuery,
)

__all__ = (
    # Snapshots
    "CartContext",
    "OrderContext",
    "Relation",
    "Context",
    # Errors
    "InvalidReason",
    "CouponInvalid",
    "CouponRejected",
    # Rules
    "validate_for_cart",
    "validate_for_order",
    "validate",
    "cart_contains_discount",
    "KindQuery",
    # Messages
    "NO_INITIAL_PAYMENT",
    "NEW_SUBSCRIPTIONS_ONLY",
    "SUBSCRIPTION_PRODUCTS_ONLY",
    "RENEWALS_ONLY",
    "SIGN_UP_FEE_REQUIRED",
    "RECURRING_NEEDS_SUBSCRIPTION",
    "SIGN_UP_NEEDS_PARENT_ORDER",
    "SUBSCRIPTION_NEEDS_RECURRING",
)
