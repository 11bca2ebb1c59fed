"""
Discount — how much a subscription coupon takes off a line.

    from recoupon import discount as D

    amount = D.compute_discount(
        coupon,
        P.PriceContext(line, P.CalculationPhase.INITIAL_TOTAL),
        single=True,
        renewal_subtotal=subtotals.renewal_subtotal(coupon.code),
        rounding=settings.rounding,
    )

Phase × group matrix (base the coupon may discount):

                    INITIAL_TOTAL                 RECURRING_TOTAL
    RECURRING       price − fee (0 in trial)      price
    SIGN_UP         sign-up fee                   —
    RENEWAL         price − fee (renewal lines)   —
"""

from recoupon.discount._types import OrderLine
from recoupon.discount._calculator import (
    discountable_base,
    raw_amount,
    compute_discount,
    compute_line_item_discount,
)
from recoupon.discount._renewal import (
    RenewalSubtotalResolver,
    RenewalSubtotals,
)

__all__ = (
    "OrderLine",
    "discountable_base",
    "raw_amount",
    "compute_discount",
    "compute_line_item_discount",
    "RenewalSubtotalResolver",
    "RenewalSubtotals",
)
