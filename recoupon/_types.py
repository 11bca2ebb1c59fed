"""
Core types for recoupon.

Re-exports from kungfu + money aliases.
"""

from __future__ import annotations

from decimal import Decimal

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Money
# ═══════════════════════════════════════════════════════════════════════════════

type Money = Decimal
"""Monetary amount. Always a Decimal inside the core."""

type Percent = Decimal
"""Percentage in the 0–100 range."""

type Code = str
"""Coupon code as stored by the host."""

type OrderId = int | str
"""Host identifier of an order or subscription."""

ZERO: Money = Decimal("0")
HUNDRED: Decimal = Decimal("100")


def money(value: Decimal | int | float | str) -> Money:
    """
    Convert a host value to Money.

    Floats go through str() so binary drift never reaches the arithmetic:
    money(0.1) == Decimal("0.1").
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Money
    "Money",
    "Percent",
    "Code",
    "OrderId",
    "ZERO",
    "HUNDRED",
    "money",
)
