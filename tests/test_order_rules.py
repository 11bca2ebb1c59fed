"""Order eligibility rules (hard failure)."""

import pytest

from recoupon import eligibility as V
from recoupon.eligibility import InvalidReason, OrderContext, Relation

from conftest import unwrap_err, unwrap_ok


def test_recurring_needs_subscription(coupon):
    rejected = unwrap_err(V.validate_for_order(coupon("recurring_fee"), OrderContext()))

    assert rejected.reason is InvalidReason.RECURRING_NEEDS_SUBSCRIPTION
    assert rejected.message == V.RECURRING_NEEDS_SUBSCRIPTION


@pytest.mark.parametrize(
    "order",
    [
        OrderContext(is_subscription=True),
        OrderContext(contains_subscription=True),
        OrderContext(contains_parent_subscription=True),
    ],
)
def test_recurring_on_subscription_orders(coupon, order):
    c = coupon("recurring_percent")
    assert unwrap_ok(V.validate_for_order(c, order)) is c


def test_sign_up_needs_parent_order(coupon):
    order = OrderContext(contains_subscription=True)

    rejected = unwrap_err(V.validate_for_order(coupon("sign_up_fee", code="JOIN"), order))

    assert rejected.reason is InvalidReason.SIGN_UP_NEEDS_PARENT_ORDER
    assert '"JOIN"' in rejected.message


@pytest.mark.parametrize(
    "order",
    [
        OrderContext(contains_parent_subscription=True),
        OrderContext(sign_up_fee_total="5"),
    ],
)
def test_sign_up_on_parent_order_or_with_fee(coupon, order):
    c = coupon("sign_up_fee_percent")
    assert unwrap_ok(V.validate_for_order(c, order)) is c


@pytest.mark.parametrize("kind", ["fixed_cart", "renewal_fee"])
def test_subscription_takes_only_recurring(coupon, kind):
    rejected = unwrap_err(
        V.validate_for_order(coupon(kind), OrderContext(is_subscription=True))
    )

    assert rejected.reason is InvalidReason.SUBSCRIPTION_NEEDS_RECURRING


def test_sign_up_on_subscription_itself(coupon):
    order = OrderContext(is_subscription=True, contains_parent_subscription=True)

    rejected = unwrap_err(V.validate_for_order(coupon("sign_up_fee"), order))

    assert rejected.reason is InvalidReason.SUBSCRIPTION_NEEDS_RECURRING


def test_core_kind_on_plain_order(coupon):
    c = coupon("percent")
    assert unwrap_ok(V.validate_for_order(c, OrderContext())) is c


# ─── validate() ───────────────────────────────────────────────────────────────


def test_validate_raises_for_order(coupon):
    with pytest.raises(V.CouponRejected) as exc_info:
        V.validate(coupon("recurring_fee", code="R"), OrderContext())

    assert exc_info.value.code == "R"
    assert exc_info.value.reason is InvalidReason.RECURRING_NEEDS_SUBSCRIPTION
    assert str(exc_info.value) == V.RECURRING_NEEDS_SUBSCRIPTION


def test_validate_returns_ok_for_valid_order(coupon):
    c = coupon("recurring_fee")
    assert unwrap_ok(V.validate(c, OrderContext(is_subscription=True))) is c


def test_rejections_compare_by_value():
    a = V.CouponRejected("X", InvalidReason.RECURRING_NEEDS_SUBSCRIPTION, "m")
    b = V.CouponRejected("X", InvalidReason.RECURRING_NEEDS_SUBSCRIPTION, "m")

    assert a == b
    assert len({a, b}) == 1


# ─── Relation ─────────────────────────────────────────────────────────────────


def test_order_contains_subscription_relation():
    child = OrderContext(contains_subscription=True)
    parent = OrderContext(contains_parent_subscription=True)

    assert child.order_contains_subscription(Relation.ANY)
    assert not child.order_contains_subscription(Relation.PARENT)
    assert parent.order_contains_subscription(Relation.ANY)
    assert parent.order_contains_subscription(Relation.PARENT)
    assert not OrderContext().order_contains_subscription()
