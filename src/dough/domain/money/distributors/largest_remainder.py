from __future__ import annotations

from typing import Sequence

from dough.application.plugins.registry import register_distributor
from dough.domain.money.distributors.base import BaseRemainderDistributor


@register_distributor(name="largest_remainder", tags={"hamilton"})
class LargestRemainderDistributor(BaseRemainderDistributor):
    """
    Hamilton's method: spare sub-units go to the parties whose exact share lost
    the most to truncation. Ties go to the earlier party.

    The truncated fraction of party i is ``|amount| * w_i mod total`` (over
    ``total``), so the ordering is computed exactly, without floats.
    """

    def distribute(
        self,
        amount: int,
        weights: Sequence[int],
        provisional: Sequence[int],
        remainder: int,
    ) -> list[int]:
        out = list(provisional)
        if remainder == 0:
            return out

        total = sum(weights)
        magnitude = abs(amount)
        order = sorted(
            (i for i, w in enumerate(weights) if w > 0),
            key=lambda i: (-(magnitude * weights[i] % total), i),
        )
        if not order:
            return out

        step = 1 if remainder > 0 else -1
        k = 0
        while remainder != 0:
            out[order[k % len(order)]] += step
            remainder -= step
            k += 1
        return out
