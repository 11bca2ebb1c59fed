"""
Passes — coupon admission and pruning for one totals pass.

    from recoupon import passes as TP

    initial = TP.TotalsPass(P.CalculationPhase.INITIAL_TOTAL, settings=settings)
    coupons = initial.admitted(applied, cart)

    recurring = TP.TotalsPass(P.CalculationPhase.RECURRING_TOTAL, settings=settings)
    plan = recurring.plan(coupons, cart_contains_subscription=True,
                          discount_totals=initial_totals, repository=repo)
"""

from recoupon.passes._plan import PassPlan, coupons_for_pass
from recoupon.passes._pass import TotalsPass

__all__ = ("PassPlan", "coupons_for_pass", "TotalsPass")
