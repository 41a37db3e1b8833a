from __future__ import annotations

from dataclasses import dataclass
from typing import List

from dough.application.plugins.registry import DEFAULT_DISTRIBUTOR, pick_distributor
from dough.domain.money.bounds import INT64, AmountBounds
from dough.domain.money.distributors.base import BaseRemainderDistributor
from dough.domain.money.errors import InternalConsistencyFailure, InvalidArgument
from dough.domain.money.types import Money, Weights

# Importing the default strategy registers it.
from dough.domain.money.distributors import round_robin as _round_robin  # noqa: F401


@dataclass(frozen=True, slots=True)
class AllocationPlan:
    """
    Full working of one allocation, kept for auditing: the weights actually
    used, the truncated shares, the remainder and who received it.
    """

    amount: int
    weights: List[int]
    provisional: List[int]
    remainder: int
    shares: List[Money]
    distributor: str
    weights_defaulted: bool = False


def _check_int(value: object, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{what} must be an integer, got {type(value).__name__}: {value!r}")
    return value


def normalize_weights(weights: Weights) -> List[int]:
    """
    Validate a weighting vector and return a normalized copy.

    An all-zero vector means "no preference" and becomes all ones (even
    split). The caller's sequence is never modified.
    """
    ws = list(weights)
    if not ws:
        raise InvalidArgument("weights must contain at least one entry")
    for i, w in enumerate(ws):
        _check_int(w, f"weights[{i}]")
        if w < 0:
            raise InvalidArgument(f"weights[{i}] must be >= 0, got {w}")
    if not any(ws):
        ws = [1] * len(ws)
    return ws


def _trunc_div(numerator: int, denominator: int) -> int:
    # toward zero, not floor: -7 / 2 -> -3
    q = abs(numerator) // denominator
    return q if numerator >= 0 else -q


def plan_allocation(
    amount: int,
    weights: Weights,
    *,
    distributor: BaseRemainderDistributor | None = None,
    bounds: AmountBounds = INT64,
) -> AllocationPlan:
    """
    Share ``amount`` between ``len(weights)`` parties in proportion to the
    weights, returning the full plan.

    Phase one gives each party ``trunc(amount * w / sum(w))`` using exact
    integer arithmetic. Phase two hands the leftover sub-units (fewer than
    one per party) out through the distributor. The result always sums to
    ``amount``; if it does not, InternalConsistencyFailure is raised.
    """
    _check_int(amount, "amount")
    bounds.check_amount(amount)

    raw = list(weights)
    ws = normalize_weights(raw)
    for w in ws:
        bounds.check_weight(w)

    total = sum(ws)
    provisional = [_trunc_div(amount * w, total) for w in ws]
    remainder = amount - sum(provisional)

    dist = distributor if distributor is not None else pick_distributor(DEFAULT_DISTRIBUTOR)
    allocations = dist.distribute(amount, ws, provisional, remainder)

    if len(allocations) != len(ws) or sum(allocations) != amount:
        raise InternalConsistencyFailure(amount, allocations, ws)

    return AllocationPlan(
        amount=amount,
        weights=ws,
        provisional=provisional,
        remainder=remainder,
        shares=[Money(a) for a in allocations],
        distributor=getattr(dist, "name", "") or type(dist).__name__,
        weights_defaulted=ws != raw,
    )


def allocate(
    amount: int,
    weights: Weights,
    *,
    distributor: BaseRemainderDistributor | None = None,
    bounds: AmountBounds = INT64,
) -> List[Money]:
    """
    Share ``amount`` between parties according to ``weights``.

        >>> allocate(100, [1, 1, 1])
        [Money(34), Money(33), Money(33)]
        >>> allocate(-105, [3, 7])
        [Money(-32), Money(-73)]
    """
    return plan_allocation(amount, weights, distributor=distributor, bounds=bounds).shares
