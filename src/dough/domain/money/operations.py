from __future__ import annotations

from typing import NamedTuple

from dough.domain.money.allocation import _check_int, allocate
from dough.domain.money.bounds import INT64, AmountBounds
from dough.domain.money.distributors.base import BaseRemainderDistributor
from dough.domain.money.errors import InvalidArgument
from dough.domain.money.types import Money


class DiscountResult(NamedTuple):
    discounted: Money
    saved: Money


def discount(
    amount: int,
    percentage: int,
    *,
    distributor: BaseRemainderDistributor | None = None,
    bounds: AmountBounds = INT64,
) -> DiscountResult:
    """Take ``percentage`` off ``amount``; ``discounted + saved == amount``."""
    _check_int(percentage, "percentage")
    if percentage < 0 or percentage > 100:
        raise InvalidArgument(f"percentage must be >= 0 and <= 100, {percentage} given")
    discounted, saved = allocate(
        amount,
        [100 - percentage, percentage],
        distributor=distributor,
        bounds=bounds,
    )
    return DiscountResult(discounted=discounted, saved=saved)


def scale(amount: int, factor: int, *, bounds: AmountBounds = INT64) -> Money:
    """
    Multiply ``amount`` by an integer ``factor``.

    Overflow is checked: Python ints never wrap, so a product that does not
    fit ``bounds`` raises ArithmeticOverflow instead.
    """
    _check_int(amount, "amount")
    _check_int(factor, "factor")
    bounds.check_amount(amount)
    return Money(bounds.check_amount(amount * factor, what="product"))
