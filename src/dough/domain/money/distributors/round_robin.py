from __future__ import annotations

from typing import Sequence

from dough.application.plugins.registry import register_distributor
from dough.domain.money.distributors.base import BaseRemainderDistributor


@register_distributor(name="round_robin", tags={"default"})
class RoundRobinDistributor(BaseRemainderDistributor):
    """
    Spare sub-units go to parties in order, first to last, skipping zero
    weights, wrapping around until none are left. Earlier parties win ties.
    """

    def distribute(
        self,
        amount: int,
        weights: Sequence[int],
        provisional: Sequence[int],
        remainder: int,
    ) -> list[int]:
        out = list(provisional)
        n = len(weights)
        if remainder == 0 or not any(w > 0 for w in weights):
            # nothing to do, or nobody eligible (caught by the invariant check)
            return out

        step = 1 if remainder > 0 else -1
        i = 0
        while remainder != 0:
            idx = i % n
            i += 1
            if weights[idx] == 0:
                continue
            out[idx] += step
            remainder -= step
        return out
