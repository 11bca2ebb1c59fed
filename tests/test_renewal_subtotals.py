"""Renewal subtotal snapshot."""

import pytest

from recoupon.discount import RenewalSubtotals

from conftest import D


def test_subtotal_by_code():
    subtotals = RenewalSubtotals.from_session({1042: ["LOYAL10"]}, {1042: D(50)})

    assert subtotals.renewal_subtotal("LOYAL10") == D(50)


def test_last_renewal_order_wins():
    subtotals = RenewalSubtotals.from_session(
        {1: ["A"], 2: ["A", "B"]},
        {1: D(50), 2: D(80)},
    )

    assert subtotals.renewal_subtotal("A") == D(80)
    assert subtotals.renewal_subtotal("B") == D(80)


def test_orders_without_subtotal_are_skipped():
    subtotals = RenewalSubtotals.from_session({1: ["A"], 2: ["B"]}, {2: D(30)})

    assert subtotals.renewal_subtotal("A") is None
    assert subtotals.renewal_subtotal("B") == D(30)


def test_unknown_code():
    assert RenewalSubtotals().renewal_subtotal("NOPE") is None


def test_snapshot_is_read_only():
    subtotals = RenewalSubtotals.from_session({1: ["A"]}, {1: D(10)})

    with pytest.raises(TypeError):
        subtotals.by_code["A"] = D(0)  # type: ignore[index]
