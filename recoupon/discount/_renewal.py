"""
Renewal subtotal — the denominator of renewal_cart shares.

The host computes it once per pass, before any line is discounted.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from recoupon._types import Code, Money, OrderId, money

# ═══════════════════════════════════════════════════════════════════════════════
# Resolver Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class RenewalSubtotalResolver(Protocol):
    """
    Supplies the subtotal of the renewal order a pseudo coupon came from.

    Only lines of that renewal order count, not products added on top.
    """

    def renewal_subtotal(self, code: Code) -> Money | None:
        """Subtotal for the coupon's renewal order. None when unknown."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# RenewalSubtotals — Snapshot Implementation
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class RenewalSubtotals:
    """
    Immutable code → subtotal snapshot.

    Example:
        subtotals = RenewalSubtotals.from_session(
            renewal_coupons={1042: ["LOYAL10"]},
            order_subtotals={1042: Decimal("50")},
        )
        subtotals.renewal_subtotal("LOYAL10")  # Decimal("50")
    """

    by_code: Mapping[Code, Money] = field(default_factory=dict)

    def renewal_subtotal(self, code: Code) -> Money | None:
        return self.by_code.get(code)

    @classmethod
    def from_session(
        cls,
        renewal_coupons: Mapping[OrderId, Iterable[Code]],
        order_subtotals: Mapping[OrderId, Money],
    ) -> RenewalSubtotals:
        """
        Build from the session's renewal order → coupon codes map.

        Orders without a known subtotal are skipped. When several renewal
        orders carry the same code, the last one wins.
        """
        by_code: dict[Code, Money] = {}
        for order_id, codes in renewal_coupons.items():
            subtotal = order_subtotals.get(order_id)
            if subtotal is None:
                continue
            for code in codes:
                by_code[code] = money(subtotal)
        return cls(MappingProxyType(by_code))


__all__ = ("RenewalSubtotalResolver", "RenewalSubtotals")
