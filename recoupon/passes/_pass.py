"""
TotalsPass — everything scoped to one totals calculation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from kungfu import Ok, Error

from recoupon._log import get_logger
from recoupon._types import Code, Money, ZERO
from recoupon.config import Settings
from recoupon.discount import RenewalSubtotalResolver, compute_discount
from recoupon.eligibility import CartContext, CouponInvalid, validate_for_cart
from recoupon.pricing import CalculationPhase, Coupon, LineItem, PriceContext
from recoupon.passes._plan import PassPlan, coupons_for_pass
from recoupon.taxonomy import CouponKind
from recoupon.usage import CouponRepository

log = get_logger("passes")


class TotalsPass:
    """
    One totals pass: a phase, the host settings and the soft errors seen.

    Create a new instance per pass. Nothing outlives it, so concurrent
    requests never see each other's errors.

    Example:
        tp = TotalsPass(CalculationPhase.INITIAL_TOTAL, settings=settings,
                        renewal_subtotals=subtotals)
        coupons = tp.admitted(applied, cart)
        for line in lines:
            for coupon in coupons:
                off = tp.discount(coupon, line, single=True)
        notices = [e.message for e in tp.errors.values()]
    """

    def __init__(
        self,
        phase: CalculationPhase,
        *,
        settings: Settings | None = None,
        renewal_subtotals: RenewalSubtotalResolver | None = None,
    ) -> None:
        self.phase = phase
        self.settings = settings if settings is not None else Settings()
        self._renewal_subtotals = renewal_subtotals
        self._errors: dict[Code, CouponInvalid] = {}

    @property
    def errors(self) -> Mapping[Code, CouponInvalid]:
        return MappingProxyType(self._errors)

    # ═══════════════════════════════════════════════════════════════════════════
    # Admission
    # ═══════════════════════════════════════════════════════════════════════════

    def admit(self, coupon: Coupon, cart: CartContext) -> bool:
        """Validate against the cart, remembering the message on failure."""
        match validate_for_cart(coupon, cart):
            case Ok(_):
                self._errors.pop(coupon.code, None)
                return True
            case Error(invalid):
                self._errors[coupon.code] = invalid
                return False
        return False

    def admitted(
        self, coupons: Iterable[Coupon], cart: CartContext
    ) -> tuple[Coupon, ...]:
        return tuple(c for c in coupons if self.admit(c, cart))

    def error_message(self, code: Code, default: str) -> str:
        """Subscription-specific message for a refused coupon, else default."""
        invalid = self._errors.get(code)
        return invalid.message if invalid is not None else default

    # ═══════════════════════════════════════════════════════════════════════════
    # Planning
    # ═══════════════════════════════════════════════════════════════════════════

    def plan(
        self,
        applied: Iterable[Coupon],
        *,
        cart_contains_subscription: bool,
        discount_totals: Mapping[Code, Money] | None = None,
        repository: CouponRepository | None = None,
    ) -> PassPlan:
        plan = coupons_for_pass(
            applied,
            self.phase,
            cart_contains_subscription=cart_contains_subscription,
            discount_totals=discount_totals,
            repository=repository,
        )
        if plan.removed:
            log.debug(
                "%s pass leaves out %s",
                self.phase.name,
                ", ".join(plan.removed_codes),
            )
        return plan

    # ═══════════════════════════════════════════════════════════════════════════
    # Discounts
    # ═══════════════════════════════════════════════════════════════════════════

    def discount(
        self,
        coupon: Coupon,
        line: LineItem,
        *,
        single: bool,
        discounting_amount: Money | None = None,
        cart_contains_renewal: bool = False,
        discount: Money = ZERO,
    ) -> Money:
        """compute_discount() with this pass's phase, rounding and subtotals."""
        renewal_subtotal: Money | None = None
        if coupon.kind is CouponKind.RENEWAL_CART and self._renewal_subtotals is not None:
            renewal_subtotal = self._renewal_subtotals.renewal_subtotal(coupon.code)

        return compute_discount(
            coupon,
            PriceContext(
                line=line,
                phase=self.phase,
                discounting_amount=discounting_amount,
                cart_contains_renewal=cart_contains_renewal,
            ),
            single=single,
            discount=discount,
            renewal_subtotal=renewal_subtotal,
            rounding=self.settings.rounding,
        )


__all__ = ("TotalsPass",)
