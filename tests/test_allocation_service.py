from __future__ import annotations

import pathlib
import sys
import unittest

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from dough.adapters.observability.memory.memory_observability import MemoryObservability
from dough.adapters.observability.noop.noop_observability import NoopObservability
from dough.application.plugins import registry
from dough.application.services.allocation_service import AllocationService
from dough.bootstrap.main import _build_observability, build_service
from dough.domain.money.bounds import INT64, UNBOUNDED, AmountBounds
from dough.domain.money.distributors.base import BaseRemainderDistributor
from dough.domain.money.errors import ArithmeticOverflow, InternalConsistencyFailure, InvalidArgument
from dough.ports.observability import semconv
from dough.shared.config import AppConfig, MoneyCfg, ObservabilityCfg


class _KeepProvisional(BaseRemainderDistributor):
    name = "keep_provisional"

    def distribute(self, amount, weights, provisional, remainder):
        return list(provisional)


def _service(distributor=None, bounds: AmountBounds = INT64) -> tuple[AllocationService, MemoryObservability]:
    obs = MemoryObservability()
    svc = AllocationService(
        distributor=distributor or registry.pick_distributor("round_robin"),
        bounds=bounds,
        observability=obs,
    )
    return svc, obs


class TestAllocationService(unittest.TestCase):
    def test_allocate_records_span_and_counters(self) -> None:
        svc, obs = _service()

        self.assertEqual([34, 33, 33], svc.allocate(100, [1, 1, 1]))

        span = obs.sink.spans_ended[0]
        self.assertEqual(semconv.SPAN_ALLOCATE, span.name)
        self.assertEqual("OK", span.status)
        self.assertEqual(100, span.attributes[semconv.ATTR_AMOUNT])
        self.assertEqual(3, span.attributes[semconv.ATTR_PARTIES])
        self.assertEqual(1, span.attributes[semconv.ATTR_REMAINDER])
        self.assertEqual("round_robin", span.attributes[semconv.ATTR_DISTRIBUTOR])
        self.assertIn(semconv.EVT_REMAINDER_DISTRIBUTED, [e["name"] for e in span.events])

        self.assertEqual(1, obs.sink.counters[semconv.METRIC_ALLOCATIONS])
        self.assertEqual(1, obs.sink.counters[semconv.METRIC_REMAINDER_UNITS])

    def test_defaulted_weights_event(self) -> None:
        svc, obs = _service()
        self.assertEqual([10000, 10000, 10000], svc.allocate(30000, [0, 0, 0]))
        names = [e["name"] for e in obs.sink.spans_ended[0].events]
        self.assertEqual([semconv.EVT_WEIGHTS_DEFAULTED], names)

    def test_invalid_argument_propagates(self) -> None:
        svc, obs = _service()
        with self.assertRaises(InvalidArgument):
            svc.allocate(100, [])

        span = obs.sink.spans_ended[0]
        self.assertEqual("ERROR", span.status)
        self.assertEqual("InvalidArgument", span.attributes[semconv.ATTR_ERROR_TYPE])
        self.assertEqual(1, obs.sink.counters[semconv.METRIC_INVALID_ARGUMENTS])
        self.assertNotIn(semconv.METRIC_ALLOCATIONS, obs.sink.counters)

    def test_invariant_failure_recorded_and_reraised(self) -> None:
        svc, obs = _service(distributor=_KeepProvisional())
        with self.assertRaises(InternalConsistencyFailure):
            svc.allocate(100, [1, 1, 1])

        span = obs.sink.spans_ended[0]
        self.assertEqual("ERROR", span.status)
        self.assertEqual(1, len(span.exceptions))
        self.assertEqual(1, obs.sink.counters[semconv.METRIC_INVARIANT_FAILURES])

    def test_discount(self) -> None:
        svc, obs = _service()
        discounted, saved = svc.discount(99, 10)
        self.assertEqual((90, 9), (discounted, saved))
        self.assertEqual(semconv.SPAN_DISCOUNT, obs.sink.spans_ended[0].name)
        self.assertEqual(10, obs.sink.spans_ended[0].attributes[semconv.ATTR_PERCENTAGE])

        with self.assertRaises(InvalidArgument):
            svc.discount(99, 101)

    def test_scale_overflow(self) -> None:
        svc, obs = _service(bounds=AmountBounds(bits=16))
        self.assertEqual(30000, svc.scale(10000, 3))
        with self.assertRaises(ArithmeticOverflow):
            svc.scale(20000, 2)
        self.assertEqual("ERROR", obs.sink.spans_ended[-1].status)

    def test_wide_amounts_reported_as_text(self) -> None:
        svc, obs = _service(bounds=UNBOUNDED)
        svc.allocate(10 ** 30, [1, 1])
        self.assertEqual(str(10 ** 30), obs.sink.spans_ended[0].attributes[semconv.ATTR_AMOUNT])

    def test_noop_backend(self) -> None:
        svc = AllocationService(
            distributor=registry.pick_distributor(),
            bounds=INT64,
            observability=NoopObservability(),
        )
        self.assertEqual([32, 73], svc.allocate(105, [3, 7]))


class TestBootstrap(unittest.TestCase):
    def test_build_service_from_config(self) -> None:
        cfg = AppConfig(
            money=MoneyCfg(amount_bits=None, distributor="largest_remainder"),
            observability=ObservabilityCfg(backend="memory"),
        )
        svc = build_service(cfg)
        self.assertEqual("largest_remainder", svc.distributor.name)
        self.assertIsNone(svc.bounds.bits)
        self.assertEqual([1, 4], svc.allocate(5, [1, 3]))

    def test_unknown_distributor(self) -> None:
        cfg = AppConfig(money=MoneyCfg(distributor="nope"))
        with self.assertRaises(KeyError):
            build_service(cfg)

    def test_unknown_backend(self) -> None:
        cfg = AppConfig(observability=ObservabilityCfg(backend="carrier-pigeon"))
        with self.assertRaises(ValueError):
            _build_observability(cfg)

    def test_otel_backend(self) -> None:
        cfg = AppConfig(observability=ObservabilityCfg(backend="otel", runner_id="test"))
        obs = _build_observability(cfg)
        try:
            svc = build_service(cfg, obs)
            self.assertEqual([34, 33, 33], svc.allocate(100, [1, 1, 1]))
            with self.assertRaises(InvalidArgument):
                svc.allocate(100, [-1])
        finally:
            obs.shutdown()


if __name__ == "__main__":
    unittest.main()
