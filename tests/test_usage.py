"""Limited-use recurring coupon tracking."""

import logging

import pytest

from recoupon import usage as U
from recoupon.config import Settings

from conftest import D


def paid(order_id, *lines, discount_total="5", **kwargs):
    return U.OrderRecord(
        order_id=order_id,
        total=D(100),
        discount_total=D(discount_total),
        coupons=tuple(U.CouponLine(code, D(amount)) for code, amount in lines),
        **kwargs,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Order Predicates
# ═══════════════════════════════════════════════════════════════════════════════


def test_unpaid_order_never_counts():
    order = paid(1, ("FIRST3", "5"), needs_payment=True)

    assert not U.counts_as_payment(order)
    assert U.compute_usage([order], {"FIRST3"}) == {"FIRST3": 0}


def test_fully_refunded_order_never_counts():
    order = paid(1, ("FIRST3", "5"), total_refunded=D(100))

    assert U.is_fully_refunded(order)
    assert U.compute_usage([order], {"FIRST3"}) == {"FIRST3": 0}


def test_refund_equality_has_tolerance():
    order = paid(1, total_refunded=D("99.9999999"))

    assert U.is_fully_refunded(order)
    assert not U.is_fully_refunded(order, tolerance=D(0))


def test_partial_refund_still_counts():
    order = paid(1, ("FIRST3", "5"), total_refunded=D(40))

    assert not U.is_fully_refunded(order)
    assert U.compute_usage([order], {"FIRST3"}) == {"FIRST3": 1}


def test_never_refunded_is_not_fully_refunded():
    assert not U.is_fully_refunded(paid(1))


def test_zero_discount_total_does_not_count():
    order = paid(1, ("FIRST3", "5"), discount_total="0")

    assert U.compute_usage([order], {"FIRST3"}) == {"FIRST3": 0}


def test_zero_coupon_discount_does_not_count():
    order = paid(1, ("FIRST3", "0"), ("OTHER", "5"))

    assert U.compute_usage([order], {"FIRST3", "OTHER"}) == {"FIRST3": 0, "OTHER": 1}


def test_unlisted_codes_are_ignored():
    order = paid(1, ("OTHER", "5"))

    assert U.compute_usage([order], {"FIRST3"}) == {"FIRST3": 0}


# ═══════════════════════════════════════════════════════════════════════════════
# Retirement Decision
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize(
    "count, limit, retire",
    [
        (1, 1, True),
        (0, 1, False),
        (3, 2, True),
        (1, 2, False),
        (0, 0, False),
        (99, 0, False),
    ],
)
def test_decide_retirement(count, limit, retire):
    assert U.decide_retirement(count, limit) is retire


def test_retirement_note_wording():
    assert U.Retirement("ONCE", 1, 1).note == (
        'Limited use coupon "ONCE" removed from subscription. It has been used 1 time.'
    )
    assert U.Retirement("BULK", 1200, 1000).note.endswith("used 1,200 times.")


# ═══════════════════════════════════════════════════════════════════════════════
# Repository & Limit Lookup
# ═══════════════════════════════════════════════════════════════════════════════


def test_limit_only_for_recurring_kinds(coupon):
    repo = U.MemoryCouponRepository(
        stored=[
            coupon("recurring_fee", code="FIRST2", limit=2),
            coupon("fixed_cart", code="CART", limit=3),
        ]
    )

    assert U.coupon_limit(repo, "FIRST2") == 2
    assert U.coupon_limit(repo, "CART") is None
    assert U.coupon_limit(repo, "MISSING") is None


def test_virtual_kind_reads_stored_coupon(coupon):
    repo = U.MemoryCouponRepository(
        stored=[coupon("recurring_fee", code="LOYAL", limit=3)],
        overrides=[coupon("renewal_fee", code="LOYAL")],
    )

    assert repo.get("LOYAL").kind.is_virtual
    assert U.coupon_limit(repo, "LOYAL") == 3
    assert U.coupon_is_limited(repo, "LOYAL")


def test_virtual_kind_without_stored_coupon(coupon):
    repo = U.MemoryCouponRepository(overrides=[coupon("renewal_cart", code="GONE")])

    assert U.coupon_limit(repo, "GONE") is None


def test_limited_recurring_coupon_lookups(coupon):
    repo = U.MemoryCouponRepository(
        stored=[
            coupon("recurring_fee", code="FIRST2", limit=2),
            coupon("recurring_percent", code="FOREVER"),
        ]
    )
    snapshot = U.SubscriptionSnapshot(subscription_id=7, used_coupon_codes=["FOREVER"])

    assert U.cart_contains_limited_recurring_coupon(repo, ["FOREVER", "FIRST2"])
    assert not U.cart_contains_limited_recurring_coupon(repo, ["FOREVER"])
    assert not U.order_has_limited_recurring_coupon(repo, snapshot)


# ═══════════════════════════════════════════════════════════════════════════════
# check_coupon_usages()
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def repository(coupon):
    return U.MemoryCouponRepository(
        stored=[
            coupon("recurring_fee", code="FIRST2", limit=2),
            coupon("recurring_percent", code="FOREVER"),
            coupon("fixed_cart", code="CART", limit=1),
        ]
    )


@pytest.fixture
def subscription():
    return U.SubscriptionSnapshot(
        subscription_id=77,
        used_coupon_codes=["FIRST2", "FOREVER", "CART"],
        related_orders=[
            paid(1, ("FIRST2", "5"), ("FOREVER", "2"), ("CART", "3")),
            paid(2, ("FIRST2", "5"), ("FOREVER", "2")),
            paid(3, ("FIRST2", "5"), needs_payment=True),
        ],
    )


def test_check_coupon_usages_retires_spent_coupon(repository, subscription):
    plan = U.check_coupon_usages(subscription, repository)

    assert plan.subscription_id == 77
    assert plan.usage == (("FIRST2", 2),)
    assert plan.codes == ("FIRST2",)
    assert plan.notes == (
        'Limited use coupon "FIRST2" removed from subscription. It has been used 2 times.',
    )


def test_check_coupon_usages_keeps_coupon_below_limit(repository):
    snapshot = U.SubscriptionSnapshot(
        subscription_id=5,
        used_coupon_codes=["FIRST2"],
        related_orders=[paid(1, ("FIRST2", "5"))],
    )

    plan = U.check_coupon_usages(snapshot, repository)

    assert plan.usage == (("FIRST2", 1),)
    assert plan.retirements == ()


def test_check_coupon_usages_without_limited_coupons(repository):
    snapshot = U.SubscriptionSnapshot(subscription_id=5, used_coupon_codes=["FOREVER"])

    plan = U.check_coupon_usages(snapshot, repository)

    assert plan.usage == ()
    assert plan.codes == ()


def test_check_coupon_usages_uses_settings_tolerance(repository):
    snapshot = U.SubscriptionSnapshot(
        subscription_id=5,
        used_coupon_codes=["FIRST2"],
        related_orders=[
            paid(1, ("FIRST2", "5")),
            paid(2, ("FIRST2", "5"), total_refunded=D("99.50")),
        ],
    )

    strict = U.check_coupon_usages(snapshot, repository)
    loose = U.check_coupon_usages(
        snapshot, repository, settings=Settings(refund_tolerance=D(1))
    )

    assert strict.codes == ("FIRST2",)
    assert loose.codes == ()


def test_check_coupon_usages_logs_retirement(repository, subscription, caplog):
    caplog.set_level(logging.INFO, logger="recoupon.usage")

    U.check_coupon_usages(subscription, repository)

    messages = [r.getMessage() for r in caplog.records if r.name == "recoupon.usage"]
    assert any("FIRST2" in m and "77" in m for m in messages)
