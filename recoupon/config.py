"""
Settings — env-backed configuration shared by every pass.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from recoupon.pricing import Rounding, RoundingMode

DEFAULT_REFUND_TOLERANCE = Decimal("0.000001")


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Host configuration.

    rounding: precision + mode for every computed discount.
    refund_tolerance: |total - refunded| at or below this counts as fully
    refunded.
    """

    rounding: Rounding = field(default_factory=Rounding)
    refund_tolerance: Decimal = DEFAULT_REFUND_TOLERANCE

    def __post_init__(self) -> None:
        if self.refund_tolerance < 0:
            raise ValueError("refund_tolerance must be >= 0")


def _decimal(raw: str, name: str) -> Decimal:
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"{name} must be a decimal, got {raw!r}") from None


def load_settings() -> Settings:
    """
    Read Settings from the environment.

        RECOUPON_ROUNDING_PRECISION   default 2
        RECOUPON_ROUNDING_MODE        default half_up
        RECOUPON_REFUND_TOLERANCE     default 0.000001
    """
    precision_raw = os.getenv("RECOUPON_ROUNDING_PRECISION", "2")
    try:
        precision = int(precision_raw)
    except ValueError:
        raise ValueError(
            f"RECOUPON_ROUNDING_PRECISION must be an integer, got {precision_raw!r}"
        ) from None

    return Settings(
        rounding=Rounding(
            precision=precision,
            mode=RoundingMode.parse(os.getenv("RECOUPON_ROUNDING_MODE", "half_up")),
        ),
        refund_tolerance=_decimal(
            os.getenv("RECOUPON_REFUND_TOLERANCE", str(DEFAULT_REFUND_TOLERANCE)),
            "RECOUPON_REFUND_TOLERANCE",
        ),
    )


__all__ = ("Settings", "load_settings", "DEFAULT_REFUND_TOLERANCE")
