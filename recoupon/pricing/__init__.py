"""
Pricing — value objects for one totals pass.

    from recoupon import pricing as P

    line = P.LineItem(unit_price=Decimal("25"), quantity=2, sign_up_fee=Decimal("10"))
    ctx = P.PriceContext(line, P.CalculationPhase.INITIAL_TOTAL)
    rounding = P.Rounding().with_mode(P.RoundingMode.HALF_EVEN)
"""

from recoupon.pricing._types import (
    CalculationPhase,
    Coupon,
    LineItem,
    PriceContext,
)
from recoupon.pricing._rounding import (
    RoundingMode,
    Rounding,
    DEFAULT_ROUNDING,
)

__all__ = (
    "CalculationPhase",
    "Coupon",
    "LineItem",
    "PriceContext",
    "RoundingMode",
    "Rounding",
    "DEFAULT_ROUNDING",
)
