from __future__ import annotations

from typing import Sequence


Weights = Sequence[int]


class Money(int):
    """
    Monetary amount in sub-units (cents, pennies, ...).

    Plain ``int`` arithmetic applies: ``+``, ``-`` and ``==`` work as usual and
    return ints. The methods below are the money-specific operations, which
    keep the result as Money.

        >>> price = Money(99)
        >>> price.share([90, 10])
        [Money(90), Money(9)]
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Money({int(self)})"

    def share(self, weights: Weights, distributor=None) -> list["Money"]:
        """Split this amount between parties in proportion to ``weights``."""
        from dough.domain.money.allocation import allocate

        return allocate(self, weights, distributor=distributor)

    def multiply(self, factor: int) -> "Money":
        from dough.domain.money.operations import scale

        return scale(self, factor)

    def percentage_discount(self, percentage: int) -> "Money":
        """Return the amount left after taking ``percentage`` off."""
        from dough.domain.money.operations import discount

        return discount(self, percentage).discounted
