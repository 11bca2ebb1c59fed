"""
Coupon kinds — the closed taxonomy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from kungfu import Result, Ok, Error

# ═══════════════════════════════════════════════════════════════════════════════
# Group & Shape
# ═══════════════════════════════════════════════════════════════════════════════


class KindGroup(Enum):
    """Which part of a subscription price a kind targets."""

    RECURRING = auto()
    SIGN_UP = auto()
    RENEWAL = auto()
    CORE = auto()


class KindShape(Enum):
    """
    How the amount is turned into a discount.

    FIXED: min(amount, base), per unit or per line.
    PERCENT: base * amount / 100.
    PROPORTIONAL: fixed total spread across renewal lines by their share.
    """

    FIXED = auto()
    PERCENT = auto()
    PROPORTIONAL = auto()


@dataclass(frozen=True, slots=True)
class _KindInfo:
    group: KindGroup
    shape: KindShape
    label: str


# ═══════════════════════════════════════════════════════════════════════════════
# CouponKind
# ═══════════════════════════════════════════════════════════════════════════════


class CouponKind(Enum):
    """
    Semantic coupon kind.

    Values are the discount type strings stored with the coupon.
    Renewal kinds are virtual: they exist only on the pseudo coupons created
    for a renewal cart and map back to a real stored coupon.
    """

    RECURRING_FEE = "recurring_fee"
    RECURRING_PERCENT = "recurring_percent"
    SIGN_UP_FEE = "sign_up_fee"
    SIGN_UP_FEE_PERCENT = "sign_up_fee_percent"
    RENEWAL_FEE = "renewal_fee"
    RENEWAL_PERCENT = "renewal_percent"
    RENEWAL_CART = "renewal_cart"

    # Core kinds, not specific to subscriptions
    FIXED_CART = "fixed_cart"
    PERCENT = "percent"
    FIXED_PRODUCT = "fixed_product"
    PERCENT_PRODUCT = "percent_product"

    @property
    def group(self) -> KindGroup:
        return _INFO[self].group

    @property
    def shape(self) -> KindShape:
        return _INFO[self].shape

    @property
    def label(self) -> str:
        return _INFO[self].label

    @property
    def is_core(self) -> bool:
        return self.group is KindGroup.CORE

    @property
    def is_subscription(self) -> bool:
        return self.group is not KindGroup.CORE

    @property
    def is_recurring(self) -> bool:
        return self.group is KindGroup.RECURRING

    @property
    def is_sign_up(self) -> bool:
        return self.group is KindGroup.SIGN_UP

    @property
    def is_renewal(self) -> bool:
        return self.group is KindGroup.RENEWAL

    @property
    def is_virtual(self) -> bool:
        """Pseudo kind whose metadata lives on the underlying coupon."""
        return self.group is KindGroup.RENEWAL


_INFO: dict[CouponKind, _KindInfo] = {
    CouponKind.RECURRING_FEE: _KindInfo(
        KindGroup.RECURRING, KindShape.FIXED, "Recurring Product Discount"
    ),
    CouponKind.RECURRING_PERCENT: _KindInfo(
        KindGroup.RECURRING, KindShape.PERCENT, "Recurring Product % Discount"
    ),
    CouponKind.SIGN_UP_FEE: _KindInfo(
        KindGroup.SIGN_UP, KindShape.FIXED, "Sign Up Fee Discount"
    ),
    CouponKind.SIGN_UP_FEE_PERCENT: _KindInfo(
        KindGroup.SIGN_UP, KindShape.PERCENT, "Sign Up Fee % Discount"
    ),
    CouponKind.RENEWAL_FEE: _KindInfo(
        KindGroup.RENEWAL, KindShape.FIXED, "Renewal product discount"
    ),
    CouponKind.RENEWAL_PERCENT: _KindInfo(
        KindGroup.RENEWAL, KindShape.PERCENT, "Renewal % discount"
    ),
    CouponKind.RENEWAL_CART: _KindInfo(
        KindGroup.RENEWAL, KindShape.PROPORTIONAL, "Renewal cart discount"
    ),
    CouponKind.FIXED_CART: _KindInfo(
        KindGroup.CORE, KindShape.FIXED, "Fixed cart discount"
    ),
    CouponKind.PERCENT: _KindInfo(
        KindGroup.CORE, KindShape.PERCENT, "Percentage discount"
    ),
    CouponKind.FIXED_PRODUCT: _KindInfo(
        KindGroup.CORE, KindShape.FIXED, "Fixed product discount"
    ),
    CouponKind.PERCENT_PRODUCT: _KindInfo(
        KindGroup.CORE, KindShape.PERCENT, "Product % discount"
    ),
}


# ═══════════════════════════════════════════════════════════════════════════════
# Kind Sets
# ═══════════════════════════════════════════════════════════════════════════════

RECURRING_KINDS: frozenset[CouponKind] = frozenset(
    k for k in CouponKind if k.is_recurring
)
SIGN_UP_KINDS: frozenset[CouponKind] = frozenset(
    k for k in CouponKind if k.is_sign_up
)
RENEWAL_KINDS: frozenset[CouponKind] = frozenset(
    k for k in CouponKind if k.is_renewal
)
SUBSCRIPTION_KINDS: frozenset[CouponKind] = (
    RECURRING_KINDS | SIGN_UP_KINDS | RENEWAL_KINDS
)
CORE_KINDS: frozenset[CouponKind] = frozenset(k for k in CouponKind if k.is_core)

# Kinds validated against individual products rather than the whole cart
PRODUCT_KINDS: frozenset[CouponKind] = SUBSCRIPTION_KINDS | {
    CouponKind.FIXED_PRODUCT,
    CouponKind.PERCENT_PRODUCT,
}


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class UnknownKind:
    """Stored discount type that is not part of the taxonomy."""

    raw: str

    @property
    def message(self) -> str:
        return f"Unknown coupon kind: {self.raw!r}"


def parse_kind(raw: str) -> Result[CouponKind, UnknownKind]:
    """
    Parse a stored discount type string.

    Example:
        match parse_kind("recurring_percent"):
            case Ok(kind):
                ...
            case Error(unknown):
                log.warning(unknown.message)
    """
    try:
        return Ok(CouponKind(raw.strip()))
    except ValueError:
        return Error(UnknownKind(raw))


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "KindGroup",
    "KindShape",
    "CouponKind",
    "RECURRING_KINDS",
    "SIGN_UP_KINDS",
    "RENEWAL_KINDS",
    "SUBSCRIPTION_KINDS",
    "CORE_KINDS",
    "PRODUCT_KINDS",
    "UnknownKind",
    "parse_kind",
)
