"""
Usage types — order history records and retirement decisions.
"""

from __future__ import annotations

from dataclasses import dataclass

from recoupon._types import Code, Money, OrderId, ZERO, money

# ═══════════════════════════════════════════════════════════════════════════════
# Order History
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CouponLine:
    """Discount a coupon actually produced on one order."""

    code: Code
    discount: Money = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "discount", money(self.discount))


@dataclass(frozen=True, slots=True)
class OrderRecord:
    """
    One order related to a subscription (parent, renewal, ...).

    total_refunded: None when the order has never been refunded.
    """

    order_id: OrderId
    total: Money
    needs_payment: bool = False
    total_refunded: Money | None = None
    discount_total: Money = ZERO
    coupons: tuple[CouponLine, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "total", money(self.total))
        object.__setattr__(self, "discount_total", money(self.discount_total))
        if self.total_refunded is not None:
            object.__setattr__(self, "total_refunded", money(self.total_refunded))
        object.__setattr__(self, "coupons", tuple(self.coupons))


@dataclass(frozen=True, slots=True)
class SubscriptionSnapshot:
    """A subscription's coupons and the orders related to it."""

    subscription_id: OrderId
    used_coupon_codes: tuple[Code, ...] = ()
    related_orders: tuple[OrderRecord, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "used_coupon_codes", tuple(self.used_coupon_codes))
        object.__setattr__(self, "related_orders", tuple(self.related_orders))


# ═══════════════════════════════════════════════════════════════════════════════
# Retirement
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Retirement:
    """A limited coupon that reached its limit and leaves the subscription."""

    code: Code
    count: int
    limit: int

    @property
    def note(self) -> str:
        """Audit note for the subscription."""
        times = "time" if self.count == 1 else "times"
        return (
            f'Limited use coupon "{self.code}" removed from subscription. '
            f"It has been used {self.count:,} {times}."
        )


@dataclass(frozen=True, slots=True)
class RetirementPlan:
    """
    Outcome of a usage check.

    Note: The host removes the coupons and stores the notes.
    """

    subscription_id: OrderId
    usage: tuple[tuple[Code, int], ...]
    retirements: tuple[Retirement, ...]

    @property
    def codes(self) -> tuple[Code, ...]:
        return tuple(r.code for r in self.retirements)

    @property
    def notes(self) -> tuple[str, ...]:
        return tuple(r.note for r in self.retirements)


__all__ = (
    "CouponLine",
    "OrderRecord",
    "SubscriptionSnapshot",
    "Retirement",
    "RetirementPlan",
)
