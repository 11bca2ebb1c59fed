"""
Discount amount calculator.

Two steps for every coupon on every line:

    1. base  — what the coupon may discount in this phase (or nothing)
    2. raw   — fixed / percent / proportional formula over the base

then round with the host's Rounding. Mismatches never raise: they give 0,
or pass the incoming discount through untouched for non-subscription cases.
"""

from __future__ import annotations

from typing import assert_never

from recoupon._types import HUNDRED, ZERO, Money, money
from recoupon.eligibility import OrderContext
from recoupon.pricing import (
    CalculationPhase,
    Coupon,
    DEFAULT_ROUNDING,
    LineItem,
    PriceContext,
    Rounding,
)
from recoupon.discount._types import OrderLine
from recoupon.taxonomy import CouponKind, KindGroup, KindShape

# ═══════════════════════════════════════════════════════════════════════════════
# Base — Phase Gating
# ═══════════════════════════════════════════════════════════════════════════════


def _without_sign_up_fee(amount: Money, line: LineItem, single: bool) -> Money:
    """The sign-up part of the initial amount belongs to sign-up kinds only."""
    fee = line.sign_up_fee if single else line.sign_up_fee * line.quantity
    return max(ZERO, amount - fee)


def discountable_base(
    kind: CouponKind,
    context: PriceContext,
    single: bool,
) -> Money | None:
    """
    Amount the coupon may discount in the current phase.

    None means the kind does not apply to this phase/line combination.
    """
    phase = context.phase
    line = context.line
    amount = context.amount_for(single)

    if phase is CalculationPhase.SUPPRESSED:
        return None

    match kind.group:
        case KindGroup.RECURRING:
            if phase is CalculationPhase.RECURRING_TOTAL:
                return amount
            # Initial total: nothing recurring is due today during a free trial
            if line.has_free_trial:
                return ZERO
            return _without_sign_up_fee(amount, line, single)
        case KindGroup.SIGN_UP:
            if phase is CalculationPhase.INITIAL_TOTAL and line.has_sign_up_fee:
                return line.sign_up_fee
            return None
        case KindGroup.RENEWAL:
            if phase is CalculationPhase.INITIAL_TOTAL and line.is_renewal_line:
                return _without_sign_up_fee(amount, line, single)
            return None
        case KindGroup.CORE:
            return None
        case _:
            assert_never(kind.group)


# ═══════════════════════════════════════════════════════════════════════════════
# Raw Amount — Formulas
# ═══════════════════════════════════════════════════════════════════════════════


def raw_amount(
    shape: KindShape,
    amount: Money,
    base: Money,
    quantity: int,
    single: bool,
    renewal_subtotal: Money | None = None,
) -> Money:
    """Unrounded discount for one coupon shape."""
    match shape:
        case KindShape.FIXED:
            raw = min(amount, base)
            return raw if single else raw * quantity
        case KindShape.PERCENT:
            return base * (amount / HUNDRED)
        case KindShape.PROPORTIONAL:
            # Spread the fixed total over renewal lines by their share of
            # the renewal subtotal, then back to a per-unit value
            if not renewal_subtotal:
                return ZERO
            share = (base * quantity) / renewal_subtotal
            return (amount * share) / quantity
        case _:
            assert_never(shape)


# ═══════════════════════════════════════════════════════════════════════════════
# compute_discount() — Cart Lines
# ═══════════════════════════════════════════════════════════════════════════════


def compute_discount(
    coupon: Coupon,
    context: PriceContext,
    *,
    single: bool,
    discount: Money = ZERO,
    renewal_subtotal: Money | None = None,
    rounding: Rounding = DEFAULT_ROUNDING,
) -> Money:
    """
    Discount a subscription coupon grants to one cart line.

    Args:
        coupon: Coupon being applied (its kind drives the branch)
        context: Line + phase of the current pass
        single: Discount one unit (True) or the whole line (False)
        discount: Discount computed by the host's core coupon logic
        renewal_subtotal: Precomputed renewal subtotal for coupon.code
        rounding: Host rounding policy

    Returns:
        The incoming discount for non-subscription cases, otherwise the
        rounded subscription discount (possibly 0).

    Example:
        ctx = PriceContext(LineItem(Decimal("25"), quantity=2),
                           CalculationPhase.RECURRING_TOTAL,
                           discounting_amount=Decimal("25"))
        compute_discount(Coupon("TEN", CouponKind.RECURRING_FEE, Decimal("10")),
                         ctx, single=False)  # Decimal("20.00")
    """
    kind = coupon.kind
    line = context.line

    if kind.is_core or context.phase is CalculationPhase.SUPPRESSED:
        return discount
    if not context.cart_contains_renewal and not line.is_subscription:
        return discount
    # Renewal carts may hold extra products that belong to no subscription
    if context.cart_contains_renewal and not line.is_renewal_line:
        return discount

    base = discountable_base(kind, context, single)
    if base is None:
        return rounding.apply(ZERO)

    raw = raw_amount(
        kind.shape,
        coupon.amount,
        base,
        line.quantity,
        single,
        money(renewal_subtotal) if renewal_subtotal is not None else None,
    )
    return rounding.apply(raw)


# ═══════════════════════════════════════════════════════════════════════════════
# compute_line_item_discount() — Existing Orders
# ═══════════════════════════════════════════════════════════════════════════════


def compute_line_item_discount(
    coupon: Coupon,
    item: OrderLine,
    order: OrderContext,
    *,
    discounting_amount: Money,
    single: bool,
    discount: Money = ZERO,
    rounding: Rounding = DEFAULT_ROUNDING,
) -> Money:
    """
    Discount a subscription coupon grants to a line of an existing order.

    Recurring kinds: subscriptions, renewal orders, or subscription products.
    Sign-up kinds: subscription products with a fee on a parent order.
    Anything else passes the incoming discount through.
    """
    kind = coupon.kind

    if kind.is_recurring and (
        order.is_subscription or order.contains_renewal or item.is_subscription_product
    ):
        base = money(discounting_amount)
    elif (
        kind.is_sign_up
        and item.is_subscription_product
        and order.contains_parent_subscription
        and item.sign_up_fee != 0
    ):
        base = item.sign_up_fee
    else:
        return discount

    raw = raw_amount(kind.shape, coupon.amount, base, item.quantity, single)
    return rounding.apply(raw)


__all__ = (
    "discountable_base",
    "raw_amount",
    "compute_discount",
    "compute_line_item_discount",
)
