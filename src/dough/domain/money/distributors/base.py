from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class BaseRemainderDistributor(ABC):
    """
    Abstract base class for remainder distribution plugins.

    After proportional truncation the provisional shares are short of the
    amount by ``remainder`` sub-units (|remainder| < number of parties). A
    distributor hands those sub-units out, one at a time, and must never give
    any to a party whose weight is zero.
    """

    # Set by decorator
    name: str = ""
    tags: set[str] = set()

    @abstractmethod
    def distribute(
        self,
        amount: int,
        weights: Sequence[int],
        provisional: Sequence[int],
        remainder: int,
    ) -> list[int]:
        raise NotImplementedError
