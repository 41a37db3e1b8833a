from __future__ import annotations

import pathlib
import random
import sys
import unittest

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from dough.domain.money.bounds import UNBOUNDED, AmountBounds
from dough.domain.money.errors import ArithmeticOverflow, InvalidArgument
from dough.domain.money.operations import DiscountResult, discount, scale
from dough.domain.money.types import Money


class TestDiscount(unittest.TestCase):
    def test_ten_percent_off_99(self) -> None:
        self.assertEqual(DiscountResult(discounted=90, saved=9), discount(99, 10))

    def test_edges(self) -> None:
        self.assertEqual((100, 0), discount(100, 0))
        self.assertEqual((0, 100), discount(100, 100))
        self.assertEqual((-90, -9), discount(-99, 10))

    def test_out_of_range(self) -> None:
        for p in (-1, 101, 1000):
            with self.subTest(percentage=p):
                with self.assertRaises(InvalidArgument):
                    discount(99, p)

    def test_non_integer_percentage(self) -> None:
        with self.assertRaises(InvalidArgument):
            discount(99, 10.0)  # type: ignore[arg-type]

    def test_parts_add_up(self) -> None:
        rng = random.Random(7)
        for _ in range(300):
            amount = rng.randint(-10 ** 7, 10 ** 7)
            p = rng.randint(0, 100)
            res = discount(amount, p)
            self.assertEqual(amount, res.discounted + res.saved)


class TestScale(unittest.TestCase):
    def test_plain_multiplication(self) -> None:
        self.assertEqual(750, scale(250, 3))
        self.assertEqual(-15, scale(-5, 3))
        self.assertEqual(0, scale(12345, 0))
        self.assertIsInstance(scale(1, 2), Money)

    def test_overflow_is_checked(self) -> None:
        with self.assertRaises(ArithmeticOverflow):
            scale(1 << 62, 2)
        self.assertEqual(-(1 << 63), scale(-(1 << 62), 2))

    def test_overflow_error_taxonomy(self) -> None:
        with self.assertRaises(OverflowError):
            scale(100, 2, bounds=AmountBounds(bits=8))
        with self.assertRaises(InvalidArgument):
            scale(100, 2, bounds=AmountBounds(bits=8))

    def test_unbounded_never_overflows(self) -> None:
        self.assertEqual(1 << 63, scale(1 << 62, 2, bounds=UNBOUNDED))

    def test_non_integer_factor(self) -> None:
        with self.assertRaises(InvalidArgument):
            scale(100, 1.5)  # type: ignore[arg-type]


class TestMoney(unittest.TestCase):
    def test_share(self) -> None:
        price = Money(99)
        self.assertEqual([90, 9], price.share([90, 10]))
        self.assertTrue(all(isinstance(s, Money) for s in price.share([1, 1])))

    def test_multiply(self) -> None:
        total = Money(100).multiply(3)
        self.assertEqual(300, total)
        self.assertIsInstance(total, Money)

    def test_percentage_discount(self) -> None:
        self.assertEqual(90, Money(99).percentage_discount(10))
        with self.assertRaises(InvalidArgument):
            Money(99).percentage_discount(101)

    def test_int_semantics(self) -> None:
        self.assertEqual(8, Money(5) + Money(3))
        self.assertEqual(Money(5), 5)
        self.assertEqual("Money(-42)", repr(Money(-42)))


if __name__ == "__main__":
    unittest.main()
