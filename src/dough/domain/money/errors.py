from __future__ import annotations


class MoneyError(Exception):
    """Base class for recoverable errors raised by the money domain."""


class InvalidArgument(MoneyError, ValueError):
    """
    Bad input from the caller: empty or negative weights, a non-integer
    amount, a discount percentage outside [0, 100].
    """


class ArithmeticOverflow(InvalidArgument, OverflowError):
    """An amount, weight or product does not fit the configured amount width."""


class InternalConsistencyFailure(BaseException):
    """
    Raised when an allocation does not add back up to the original amount.

    This signals a defect in the allocator, never bad input, so it derives
    from BaseException: an ``except Exception`` handler will not swallow it.
    """

    def __init__(self, amount: int, allocations: list[int], weights: list[int]) -> None:
        self.amount = amount
        self.allocations = list(allocations)
        self.weights = list(weights)
        super().__init__(
            f"bad allocation: started with {amount} sub-units, allocated "
            f"{sum(self.allocations)} as {self.allocations} (weights={self.weights})"
        )
