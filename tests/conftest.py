"""Shared fixtures and helpers for recoupon tests."""

from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest
from kungfu import Ok, Error

from recoupon.pricing import Coupon
from recoupon.taxonomy import CouponKind


def D(value: str | int) -> Decimal:
    return Decimal(str(value))


def unwrap_ok(result):
    match result:
        case Ok(value):
            return value
        case Error(error):
            pytest.fail(f"expected Ok, got Error({error!r})")


def unwrap_err(result):
    match result:
        case Ok(value):
            pytest.fail(f"expected Error, got Ok({value!r})")
        case Error(error):
            return error


def run(lazy):
    """Await a LazyCoroResult from synchronous test code."""

    async def go():
        return await lazy()

    return asyncio.run(go())


@pytest.fixture
def coupon():
    """Factory: coupon("recurring_fee", 10, code="TEN", limit=0)."""

    def make(kind: str | CouponKind, amount="10", *, code: str | None = None, limit: int = 0) -> Coupon:
        kind = kind if isinstance(kind, CouponKind) else CouponKind(kind)
        return Coupon(
            code=code or kind.value.upper(),
            kind=kind,
            amount=D(amount),
            usage_limit_payments=limit,
        )

    return make


@pytest.fixture(autouse=True)
def _clean_recoupon_env(monkeypatch):
    """Keep host environment variables out of settings tests."""
    for name in (
        "RECOUPON_ROUNDING_PRECISION",
        "RECOUPON_ROUNDING_MODE",
        "RECOUPON_REFUND_TOLERANCE",
    ):
        monkeypatch.delenv(name, raising=False)
