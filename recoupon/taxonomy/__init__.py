"""
Taxonomy — the closed set of coupon kinds.

    from recoupon import taxonomy as T

    kind = T.CouponKind.RECURRING_PERCENT
    kind.group      # KindGroup.RECURRING
    kind.shape      # KindShape.PERCENT
    kind in T.SUBSCRIPTION_KINDS
"""

from recoupon.taxonomy._kinds import (
    KindGroup,
    KindShape,
    CouponKind,
    RECURRING_KINDS,
    SIGN_UP_KINDS,
    RENEWAL_KINDS,
    SUBSCRIPTION_KINDS,
    CORE_KINDS,
    PRODUCT_KINDS,
    UnknownKind,
    parse_kind,
)

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
