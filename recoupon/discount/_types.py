"""
Discount types.
"""

from __future__ import annotations

from dataclasses import dataclass

from recoupon._types import Money, ZERO, money


@dataclass(frozen=True, slots=True)
class OrderLine:
    """A line of an existing order, as the admin apply-coupon path sees it."""

    quantity: int = 1
    sign_up_fee: Money = ZERO
    is_subscription_product: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "sign_up_fee", money(self.sign_up_fee))
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")


__all__ = ("OrderLine",)
