"""
Host — async loaders that prepare snapshots before a pass.

    from recoupon import host as H

    match await H.load_subscription(sub_id, codes, order_ids, fetch_order)():
        case Ok(snapshot):
            plan = U.check_coupon_usages(snapshot, repository)
        case Error(e):
            log.warning(e.message)
"""

from recoupon.host._loaders import (
    HostErrorKind,
    HostError,
    FetchSubtotal,
    FetchOrder,
    load_renewal_subtotals,
    load_subscription,
)

__all__ = (
    "HostErrorKind",
    "HostError",
    "FetchSubtotal",
    "FetchOrder",
    "load_renewal_subtotals",
    "load_subscription",
)
