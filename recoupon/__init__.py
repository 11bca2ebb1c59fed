"""
recoupon — subscription-aware coupon discounts.

    from recoupon import taxonomy as T      # Coupon kinds
    from recoupon import pricing as P       # Lines, phases, rounding
    from recoupon import discount as D      # Discount amounts
    from recoupon import eligibility as V   # Cart / order validation
    from recoupon import usage as U         # Limited-use tracking
    from recoupon import passes as TP       # Per-pass admission & pruning
    from recoupon import host as H          # Async snapshot loaders
"""

from recoupon import taxonomy
from recoupon import pricing
from recoupon import discount
from recoupon import eligibility
from recoupon import usage
from recoupon import passes
from recoupon import host
from recoupon.config import Settings, load_settings
from recoupon._log import get_logger, configure_logging
from recoupon._types import (
    Money,
    Percent,
    Code,
    OrderId,
    ZERO,
    money,
)

__version__ = "0.1.0"

__all__ = (
    "taxonomy",
    "pricing",
    "discount",
    "eligibility",
    "usage",
    "passes",
    "host",
    "Settings",
    "load_settings",
    "get_logger",
    "configure_logging",
    "Money",
    "Percent",
    "Code",
    "OrderId",
    "ZERO",
    "money",
)
