"""
Coupon repository — read-only coupon lookup for limit checks.

get(code) honours host overrides (e.g. pseudo renewal coupons that shadow
the stored one). get_raw(code) reads the stored record only.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from recoupon._types import Code
from recoupon.pricing import Coupon
from recoupon.usage._types import SubscriptionSnapshot

# ═══════════════════════════════════════════════════════════════════════════════
# Repository Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class CouponRepository(Protocol):
    """
    Read-only coupon lookup.

    Example (host implementation over its own storage):

        class ShopCoupons:
            def __init__(self, db: Database, session: Session):
                self.db = db
                self.session = session

            def get(self, code: str) -> Coupon | None:
                if pseudo := self.session.renewal_coupon(code):
                    return pseudo
                return self.get_raw(code)

            def get_raw(self, code: str) -> Coupon | None:
                row = self.db.coupons.find(code)
                return row.to_coupon() if row else None
    """

    def get(self, code: Code) -> Coupon | None:
        """Coupon as currently applied, overrides included."""
        ...

    def get_raw(self, code: Code) -> Coupon | None:
        """Stored coupon, bypassing any override."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Memory Repository — Tests / Snapshots
# ═══════════════════════════════════════════════════════════════════════════════


class MemoryCouponRepository:
    """
    In-memory repository.

    stored: coupons as persisted by the shop.
    overrides: coupons that shadow the stored ones during a request
    (renewal pseudo coupons).
    """

    def __init__(
        self,
        stored: Iterable[Coupon] = (),
        overrides: Iterable[Coupon] = (),
    ) -> None:
        self._stored: dict[Code, Coupon] = {c.code: c for c in stored}
        self._overrides: dict[Code, Coupon] = {c.code: c for c in overrides}

    def get(self, code: Code) -> Coupon | None:
        if code in self._overrides:
            return self._overrides[code]
        return self._stored.get(code)

    def get_raw(self, code: Code) -> Coupon | None:
        return self._stored.get(code)


# ═══════════════════════════════════════════════════════════════════════════════
# Limit Lookup
# ═══════════════════════════════════════════════════════════════════════════════


def coupon_limit(repository: CouponRepository, code: Code) -> int | None:
    """
    Payment limit of a recurring coupon.

    Returns:
        None for unknown or non-recurring coupons, 0 for unlimited,
        N for coupons active for N payments.

    Note: Virtual renewal kinds map back to the stored coupon first;
    the limit only ever lives on the real record.
    """
    coupon = repository.get(code)
    if coupon is not None and coupon.kind.is_virtual:
        coupon = repository.get_raw(code)

    if coupon is None or not coupon.kind.is_recurring:
        return None
    return coupon.usage_limit_payments


def coupon_is_limited(repository: CouponRepository, code: Code) -> bool:
    return bool(coupon_limit(repository, code))


def cart_contains_limited_recurring_coupon(
    repository: CouponRepository, applied_codes: Iterable[Code]
) -> bool:
    return any(coupon_is_limited(repository, code) for code in applied_codes)


def order_has_limited_recurring_coupon(
    repository: CouponRepository, subscription: SubscriptionSnapshot
) -> bool:
    return cart_contains_limited_recurring_coupon(
        repository, subscription.used_coupon_codes
    )


__all__ = (
    "CouponRepository",
    "MemoryCouponRepository",
    "coupon_limit",
    "coupon_is_limited",
    "cart_contains_limited_recurring_coupon",
    "order_has_limited_recurring_coupon",
)
