"""
Rounding policy — precision + mode supplied by the host.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum


# ═══════════════════════════════════════════════════════════════════════════════
# Rounding Mode
# ═══════════════════════════════════════════════════════════════════════════════


class RoundingMode(Enum):
    """
    Rounding mode for computed discounts.

    Values are the decimal module constants, so a mode can be passed
    straight to Decimal.quantize().
    """

    HALF_UP = decimal.ROUND_HALF_UP
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    UP = decimal.ROUND_UP
    DOWN = decimal.ROUND_DOWN
    CEILING = decimal.ROUND_CEILING
    FLOOR = decimal.ROUND_FLOOR

    @classmethod
    def parse(cls, raw: str) -> RoundingMode:
        """Parse "half_up", "HALF-EVEN", ... Raises ValueError when unknown."""
        name = raw.strip().upper().replace("-", "_")
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown rounding mode: {raw!r}") from None


# ═══════════════════════════════════════════════════════════════════════════════
# Rounding — Immutable Policy
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Rounding:
    """
    Rounding applied as the last step of every discount calculation.

    Example:
        rounding = Rounding().with_precision(2).with_mode(RoundingMode.HALF_EVEN)
        rounding.apply(Decimal("2.675"))  # Decimal("2.68") under HALF_UP

    Note: Immutable — each with_* returns a new Rounding.
    """

    precision: int = 2
    mode: RoundingMode = RoundingMode.HALF_UP

    def __post_init__(self) -> None:
        if self.precision < 0:
            raise ValueError("precision must be >= 0")

    @property
    def quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.precision)

    def with_precision(self, precision: int) -> Rounding:
        return replace(self, precision=precision)

    def with_mode(self, mode: RoundingMode) -> Rounding:
        return replace(self, mode=mode)

    def apply(self, value: Decimal) -> Decimal:
        """Quantize to the policy precision, whatever the magnitude of value."""
        digits = max(value.adjusted(), 0) + 2 + self.precision
        with decimal.localcontext() as ctx:
            ctx.prec = max(ctx.prec, digits)
            return value.quantize(self.quantum, rounding=self.mode.value)


DEFAULT_ROUNDING = Rounding()


__all__ = ("RoundingMode", "Rounding", "DEFAULT_ROUNDING")
