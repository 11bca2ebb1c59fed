"""
Cart rules — soft invalidation.

Rules run in order and the first failing one decides the reason.
"""

from __future__ import annotations

from kungfu import Result, Ok, Error

from recoupon._log import get_logger
from recoupon.eligibility._types import CartContext, CouponInvalid, InvalidReason
from recoupon.pricing import Coupon

log = get_logger("eligibility")

NO_INITIAL_PAYMENT = (
    "Sorry, this coupon is only valid for an initial payment and the cart "
    "does not require an initial payment."
)
NEW_SUBSCRIPTIONS_ONLY = "Sorry, this coupon is only valid for new subscriptions."
SUBSCRIPTION_PRODUCTS_ONLY = (
    "Sorry, this coupon is only valid for subscription products."
)
RENEWALS_ONLY = 'Sorry, the "{code}" coupon is only valid for renewals.'
SIGN_UP_FEE_REQUIRED = (
    "Sorry, this coupon is only valid for subscription products with a "
    "sign-up fee."
)


def _first_violation(
    coupon: Coupon, cart: CartContext
) -> tuple[InvalidReason, str] | None:
    kind = coupon.kind

    if kind.is_core:
        # Something must be due now, e.g. not an all-free-trial cart
        if (cart.contains_renewal or cart.contains_subscription) and cart.subtotal == 0:
            return InvalidReason.NO_INITIAL_PAYMENT, NO_INITIAL_PAYMENT
        return None

    if cart.contains_renewal and not kind.is_renewal:
        return InvalidReason.NEW_SUBSCRIPTIONS_ONLY, NEW_SUBSCRIPTIONS_ONLY

    if not cart.contains_renewal and not cart.contains_subscription:
        return InvalidReason.SUBSCRIPTION_PRODUCTS_ONLY, SUBSCRIPTION_PRODUCTS_ONLY

    if not cart.contains_renewal and kind.is_renewal:
        return InvalidReason.RENEWALS_ONLY, RENEWALS_ONLY.format(code=coupon.code)

    if cart.subscription_sign_up_fee_total == 0 and kind.is_sign_up:
        return InvalidReason.SIGN_UP_FEE_REQUIRED, SIGN_UP_FEE_REQUIRED

    return None


def validate_for_cart(
    coupon: Coupon, cart: CartContext
) -> Result[Coupon, CouponInvalid]:
    """
    Check whether a coupon may apply to the cart.

    Returns:
        Ok(coupon) when valid, Error(CouponInvalid) otherwise.

    Example:
        match validate_for_cart(coupon, cart):
            case Ok(_):
                applied.append(coupon)
            case Error(invalid):
                notices.append(invalid.message)
    """
    violation = _first_violation(coupon, cart)
    if violation is None:
        return Ok(coupon)

    reason, message = violation
    log.debug("coupon %s invalid for cart: %s", coupon.code, reason.name)
    return Error(CouponInvalid(code=coupon.code, reason=reason, message=message))


__all__ = (
    "validate_for_cart",
    "NO_INITIAL_PAYMENT",
    "NEW_SUBSCRIPTIONS_ONLY",
    "SUBSCRIPTION_PRODUCTS_ONLY",
    "RENEWALS_ONLY",
    "SIGN_UP_FEE_REQUIRED",
)
