"""Async snapshot loaders."""

from recoupon import host as H
from recoupon import usage as U

from conftest import D, run, unwrap_err, unwrap_ok


def order(order_id):
    return U.OrderRecord(
        order_id=order_id,
        total=D(100),
        discount_total=D(5),
        coupons=(U.CouponLine("FIRST2", D(5)),),
    )


# ─── load_renewal_subtotals() ─────────────────────────────────────────────────


def test_load_renewal_subtotals():
    known = {1: D(50), 2: D(80)}

    async def fetch_subtotal(order_id):
        return known.get(order_id)

    result = run(H.load_renewal_subtotals({1: ["A"], 2: ["B"], 3: ["C"]}, fetch_subtotal))

    subtotals = unwrap_ok(result)
    assert subtotals.renewal_subtotal("A") == D(50)
    assert subtotals.renewal_subtotal("B") == D(80)
    assert subtotals.renewal_subtotal("C") is None


def test_load_renewal_subtotals_empty_session():
    async def fetch_subtotal(order_id):
        raise AssertionError("no orders to fetch")

    subtotals = unwrap_ok(run(H.load_renewal_subtotals({}, fetch_subtotal)))

    assert subtotals.renewal_subtotal("A") is None


def test_load_renewal_subtotals_fetch_failure():
    async def fetch_subtotal(order_id):
        if order_id == 2:
            raise ConnectionError("orders db down")
        return D(10)

    error = unwrap_err(run(H.load_renewal_subtotals({1: ["A"], 2: ["B"]}, fetch_subtotal)))

    assert error.kind is H.HostErrorKind.FETCH
    assert error.order_id == 2
    assert "orders db down" in error.message


# ─── load_subscription() ──────────────────────────────────────────────────────


def test_load_subscription():
    async def fetch_order(order_id):
        return order(order_id)

    snapshot = unwrap_ok(run(H.load_subscription(77, ["FIRST2"], [10, 11], fetch_order)))

    assert snapshot.subscription_id == 77
    assert snapshot.used_coupon_codes == ("FIRST2",)
    assert [o.order_id for o in snapshot.related_orders] == [10, 11]


def test_load_subscription_missing_order():
    async def fetch_order(order_id):
        return None if order_id == 11 else order(order_id)

    error = unwrap_err(run(H.load_subscription(77, ["FIRST2"], [10, 11], fetch_order)))

    assert error.kind is H.HostErrorKind.MISSING
    assert error.order_id == 11


def test_load_subscription_fetch_failure():
    async def fetch_order(order_id):
        raise TimeoutError("slow")

    error = unwrap_err(run(H.load_subscription(77, [], [10], fetch_order)))

    assert error.kind is H.HostErrorKind.FETCH
    assert error.order_id == 10


def test_loaded_snapshot_feeds_usage_check(coupon):
    async def fetch_order(order_id):
        return order(order_id)

    snapshot = unwrap_ok(run(H.load_subscription(77, ["FIRST2"], [10, 11], fetch_order)))
    repo = U.MemoryCouponRepository(stored=[coupon("recurring_fee", code="FIRST2", limit=2)])

    assert U.check_coupon_usages(snapshot, repo).codes == ("FIRST2",)
