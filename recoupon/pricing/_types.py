"""
Pricing types — coupon, line and the phase of the totals pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from recoupon._types import Code, Money, Percent, ZERO, money
from recoupon.taxonomy import CouponKind

# ═══════════════════════════════════════════════════════════════════════════════
# Calculation Phase
# ═══════════════════════════════════════════════════════════════════════════════


class CalculationPhase(Enum):
    """
    Which total the host is computing right now.

    INITIAL_TOTAL: amount due today (sign-up fee + first period).
    RECURRING_TOTAL: amount shown for future periods.
    SUPPRESSED: no subscription content, subscription logic stays out.

    Note: Supplied by the host for a whole pass, never derived here.
    """

    INITIAL_TOTAL = auto()
    RECURRING_TOTAL = auto()
    SUPPRESSED = auto()


# ═══════════════════════════════════════════════════════════════════════════════
# Coupon
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Coupon:
    """
    Read-only coupon as seen by the core.

    amount: fixed money amount, or a percent for *_percent kinds.
    usage_limit_payments: 0 = unlimited, N = first N payments (initial included).
    """

    code: Code
    kind: CouponKind
    amount: Money | Percent
    usage_limit_payments: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", money(self.amount))
        if self.usage_limit_payments < 0:
            raise ValueError("usage_limit_payments must be >= 0")

    @property
    def is_limited(self) -> bool:
        return self.usage_limit_payments > 0


# ═══════════════════════════════════════════════════════════════════════════════
# Line Item
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class LineItem:
    """
    One sellable line.

    Facts such as is_subscription / is_renewal_line come from the host.
    """

    unit_price: Money
    quantity: int = 1
    sign_up_fee: Money = ZERO
    trial_length_days: int = 0
    is_renewal_line: bool = False
    is_subscription: bool = True
    trial_consumed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit_price", money(self.unit_price))
        object.__setattr__(self, "sign_up_fee", money(self.sign_up_fee))
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")
        if self.sign_up_fee < 0:
            raise ValueError("sign_up_fee must be >= 0")
        if self.trial_length_days < 0:
            raise ValueError("trial_length_days must be >= 0")

    @property
    def has_free_trial(self) -> bool:
        return self.trial_length_days > 0 and not self.trial_consumed

    @property
    def has_sign_up_fee(self) -> bool:
        return self.sign_up_fee > 0


# ═══════════════════════════════════════════════════════════════════════════════
# Price Context
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PriceContext:
    """
    A line priced within one pass.

    discounting_amount: the price the host asks to discount. When omitted it
    is derived from the line (see amount_for()).
    """

    line: LineItem
    phase: CalculationPhase
    discounting_amount: Money | None = None
    cart_contains_renewal: bool = False

    def __post_init__(self) -> None:
        if self.discounting_amount is not None:
            object.__setattr__(
                self, "discounting_amount", money(self.discounting_amount)
            )

    def amount_for(self, single: bool) -> Money:
        """
        Discounting amount for a unit (single) or the whole line.

        In INITIAL_TOTAL the sign-up fee is part of what is due today.
        """
        if self.discounting_amount is not None:
            return self.discounting_amount

        unit = self.line.unit_price
        if self.phase is CalculationPhase.INITIAL_TOTAL:
            unit += self.line.sign_up_fee
        return unit if single else unit * self.line.quantity


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "CalculationPhase",
    "Coupon",
    "LineItem",
    "PriceContext",
)
