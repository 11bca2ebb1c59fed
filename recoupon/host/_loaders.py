"""
Snapshot loaders — build pass inputs from async host callables.

Uses combinators.traverse_par for parallel fetches with fail-fast Result
semantics. Nothing here is called during a pass: the host awaits the
loaders first, then hands the snapshots to the synchronous core.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum, auto

import combinators as C
from combinators import lift as L
from kungfu import LazyCoroResult

from recoupon._log import get_logger
from recoupon._types import Code, Money, OrderId
from recoupon.discount import RenewalSubtotals
from recoupon.usage import OrderRecord, SubscriptionSnapshot

log = get_logger("host")

# ═══════════════════════════════════════════════════════════════════════════════
# Host Error
# ═══════════════════════════════════════════════════════════════════════════════


class HostErrorKind(Enum):
    """What went wrong while loading a snapshot."""

    FETCH = auto()  # Host callable raised
    MISSING = auto()  # Host returned nothing for a required record


@dataclass(frozen=True, slots=True)
class HostError:
    """Snapshot loading error."""

    kind: HostErrorKind
    message: str
    order_id: OrderId | None = None


def _fetch_error(order_id: OrderId, e: Exception) -> HostError:
    log.warning("fetching order %s failed: %s", order_id, e)
    return HostError(HostErrorKind.FETCH, str(e), order_id)


# ═══════════════════════════════════════════════════════════════════════════════
# Fetch Function Types
# ═══════════════════════════════════════════════════════════════════════════════

type FetchSubtotal = Callable[[OrderId], Awaitable[Money | None]]
"""Subtotal of a renewal order. None when the order no longer exists."""

type FetchOrder = Callable[[OrderId], Awaitable[OrderRecord | None]]
"""Related order as an OrderRecord. None when it no longer exists."""


# ═══════════════════════════════════════════════════════════════════════════════
# load_renewal_subtotals()
# ═══════════════════════════════════════════════════════════════════════════════


def load_renewal_subtotals(
    renewal_coupons: Mapping[OrderId, Iterable[Code]],
    fetch_subtotal: FetchSubtotal,
) -> LazyCoroResult[RenewalSubtotals, HostError]:
    """
    Resolve renewal subtotals for every renewal order in the session.

    Orders the host cannot find are skipped, like a missing order in the
    session map. Any raised exception fails the whole load.

    Example:
        result = await H.load_renewal_subtotals(
            session.renewal_coupons,
            fetch_subtotal=orders.subtotal,
        )()
        match result:
            case Ok(subtotals):
                tp = TotalsPass(phase, renewal_subtotals=subtotals)
            case Error(e):
                ...
    """
    codes_by_order = {oid: tuple(codes) for oid, codes in renewal_coupons.items()}

    def fetch_one(
        order_id: OrderId,
    ) -> LazyCoroResult[tuple[OrderId, Money | None], HostError]:
        async def do_fetch() -> tuple[OrderId, Money | None]:
            return order_id, await fetch_subtotal(order_id)

        return L.catching_async(
            do_fetch,
            on_error=lambda e: _fetch_error(order_id, e),
        )

    def build(pairs: list[tuple[OrderId, Money | None]]) -> RenewalSubtotals:
        subtotals = {oid: s for oid, s in pairs if s is not None}
        return RenewalSubtotals.from_session(codes_by_order, subtotals)

    return C.traverse_par(list(codes_by_order), fetch_one).map(build)


# ═══════════════════════════════════════════════════════════════════════════════
# load_subscription()
# ═══════════════════════════════════════════════════════════════════════════════


def load_subscription(
    subscription_id: OrderId,
    used_coupon_codes: Iterable[Code],
    related_order_ids: Iterable[OrderId],
    fetch_order: FetchOrder,
) -> LazyCoroResult[SubscriptionSnapshot, HostError]:
    """
    Load a subscription's related orders for the usage check.

    Unlike subtotals, a related order that cannot be found is an error
    (HostErrorKind.MISSING): usages are only counted over a full history.
    """
    codes = tuple(used_coupon_codes)

    def fetch_one(order_id: OrderId) -> LazyCoroResult[OrderRecord, HostError]:
        async def do_fetch() -> OrderRecord:
            record = await fetch_order(order_id)
            if record is None:
                raise LookupError(f"related order {order_id} not found")
            return record

        def on_error(e: Exception) -> HostError:
            if isinstance(e, LookupError):
                log.warning("subscription %s: %s", subscription_id, e)
                return HostError(HostErrorKind.MISSING, str(e), order_id)
            return _fetch_error(order_id, e)

        return L.catching_async(do_fetch, on_error=on_error)

    return C.traverse_par(list(related_order_ids), fetch_one).map(
        lambda orders: SubscriptionSnapshot(
            subscription_id=subscription_id,
            used_coupon_codes=codes,
            related_orders=tuple(orders),
        )
    )


__all__ = (
    "HostErrorKind",
    "HostError",
    "FetchSubtotal",
    "FetchOrder",
    "load_renewal_subtotals",
    "load_subscription",
)
