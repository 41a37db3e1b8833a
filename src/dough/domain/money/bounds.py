from __future__ import annotations

from dataclasses import dataclass

from dough.domain.money.errors import ArithmeticOverflow


@dataclass(frozen=True, slots=True)
class AmountBounds:
    """
    Width of the integer type amounts are expected to fit in.

    Intermediate arithmetic is always exact (Python ints), so the only place
    overflow can happen is at the edges: amounts coming in, weights coming in,
    and products coming out of ``scale``. Those are checked against ``bits``
    and rejected with ArithmeticOverflow. ``bits=None`` disables the check.
    """

    bits: int | None = 64

    def __post_init__(self) -> None:
        if self.bits is not None and self.bits < 2:
            raise ValueError(f"amount width must be at least 2 bits, got {self.bits}")

    @property
    def min_amount(self) -> int | None:
        return None if self.bits is None else -(1 << (self.bits - 1))

    @property
    def max_amount(self) -> int | None:
        return None if self.bits is None else (1 << (self.bits - 1)) - 1

    @property
    def max_weight(self) -> int | None:
        # weights are unsigned
        return None if self.bits is None else (1 << self.bits) - 1

    def check_amount(self, value: int, what: str = "amount") -> int:
        if self.bits is None:
            return value
        if value < self.min_amount or value > self.max_amount:  # type: ignore[operator]
            raise ArithmeticOverflow(
                f"{what} {value} does not fit in a signed {self.bits}-bit integer"
            )
        return value

    def check_weight(self, value: int) -> int:
        if self.bits is not None and value > self.max_weight:  # type: ignore[operator]
            raise ArithmeticOverflow(
                f"weight {value} does not fit in an unsigned {self.bits}-bit integer"
            )
        return value


INT64 = AmountBounds(bits=64)
UNBOUNDED = AmountBounds(bits=None)
