"""
Eligibility types — cart/order snapshots and the two error tiers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from recoupon._types import Code, Money, ZERO, money

# ═══════════════════════════════════════════════════════════════════════════════
# Snapshots
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CartContext:
    """Facts about the cart for one totals pass."""

    contains_subscription: bool = False
    contains_renewal: bool = False
    subscription_sign_up_fee_total: Money = ZERO
    subtotal: Money = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "subscription_sign_up_fee_total",
            money(self.subscription_sign_up_fee_total),
        )
        object.__setattr__(self, "subtotal", money(self.subtotal))


class Relation(Enum):
    """Which subscription relation an order must have."""

    ANY = auto()
    PARENT = auto()


@dataclass(frozen=True, slots=True)
class OrderContext:
    """
    Facts about an order or subscription a coupon is applied to.

    is_subscription: the object itself is a subscription.
    contains_subscription: order relates to a subscription in any way.
    contains_parent_subscription: order is the parent order of a subscription.
    """

    is_subscription: bool = False
    contains_subscription: bool = False
    contains_parent_subscription: bool = False
    contains_renewal: bool = False
    sign_up_fee_total: Money = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "sign_up_fee_total", money(self.sign_up_fee_total))

    def order_contains_subscription(self, relation: Relation = Relation.ANY) -> bool:
        match relation:
            case Relation.ANY:
                return self.contains_subscription or self.contains_parent_subscription
            case Relation.PARENT:
                return self.contains_parent_subscription


# ═══════════════════════════════════════════════════════════════════════════════
# Reasons
# ═══════════════════════════════════════════════════════════════════════════════


class InvalidReason(Enum):
    """Why a coupon was refused."""

    # Cart (soft)
    NO_INITIAL_PAYMENT = auto()
    NEW_SUBSCRIPTIONS_ONLY = auto()
    SUBSCRIPTION_PRODUCTS_ONLY = auto()
    RENEWALS_ONLY = auto()
    SIGN_UP_FEE_REQUIRED = auto()
    # Order (hard)
    RECURRING_NEEDS_SUBSCRIPTION = auto()
    SIGN_UP_NEEDS_PARENT_ORDER = auto()
    SUBSCRIPTION_NEEDS_RECURRING = auto()


# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CouponInvalid:
    """
    Soft invalidation from the cart rules.

    The coupon is not applied; message is safe to show the customer.
    """

    code: Code
    reason: InvalidReason
    message: str


class CouponRejected(Exception):
    """
    Hard failure from the order rules.

    The apply-coupon action on the order must abort.
    """

    def __init__(self, code: Code, reason: InvalidReason, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.reason = reason
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CouponRejected):
            return NotImplemented
        return (self.code, self.reason, self.message) == (
            other.code,
            other.reason,
            other.message,
        )

    def __hash__(self) -> int:
        return hash((self.code, self.reason, self.message))


type Context = CartContext | OrderContext


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "CartContext",
    "OrderContext",
    "Relation",
    "Context",
    "InvalidReason",
    "CouponInvalid",
    "CouponRejected",
)
