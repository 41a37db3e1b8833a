from __future__ import annotations

import logging
from typing import List

from dough.domain.money.allocation import plan_allocation
from dough.domain.money.bounds import AmountBounds
from dough.domain.money.distributors.base import BaseRemainderDistributor
from dough.domain.money.errors import InternalConsistencyFailure, MoneyError
from dough.domain.money.operations import DiscountResult, discount, scale
from dough.domain.money.types import Money, Weights
from dough.ports.observability import semconv
from dough.ports.observability.observability import ObservabilityPort
from dough.ports.observability.traces import SpanPort
from dough.shared.decorators import logged

_log = logging.getLogger(__name__)

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _attr_int(value: int) -> int | str:
    # OTel attributes are int64; wider amounts are reported as text
    return value if _INT64_MIN <= value <= _INT64_MAX else str(value)


class AllocationService:
    """
    Configured entry point for host applications.

    Wraps the pure money operations with a fixed remainder distributor and
    amount width, and reports every call as a span plus a few counters.
    Errors are never handled here, only recorded and re-raised.
    """

    def __init__(
        self,
        *,
        distributor: BaseRemainderDistributor,
        bounds: AmountBounds,
        observability: ObservabilityPort,
    ) -> None:
        self.distributor = distributor
        self.bounds = bounds
        self._tracer = observability.traces.get_tracer("dough.allocation_service")
        meter = observability.metrics.get_meter("dough.allocation_service")
        self._allocations = meter.create_counter(
            semconv.METRIC_ALLOCATIONS, unit="1", description="Allocations computed"
        )
        self._remainder_units = meter.create_counter(
            semconv.METRIC_REMAINDER_UNITS, unit="1", description="Sub-units handed out after truncation"
        )
        self._invalid = meter.create_counter(
            semconv.METRIC_INVALID_ARGUMENTS, unit="1", description="Calls rejected for bad input"
        )
        self._failures = meter.create_counter(
            semconv.METRIC_INVARIANT_FAILURES, unit="1", description="Allocations that did not sum to the amount"
        )

    @property
    def _base_attrs(self) -> dict:
        return {
            semconv.ATTR_DISTRIBUTOR: self.distributor.name,
            semconv.ATTR_AMOUNT_BITS: self.bounds.bits if self.bounds.bits is not None else 0,
        }

    def _record_error(self, span: SpanPort, exc: BaseException) -> None:
        span.record_exception(exc)
        span.set_attribute(semconv.ATTR_ERROR_TYPE, type(exc).__name__)
        span.set_status_error(str(exc))
        if isinstance(exc, InternalConsistencyFailure):
            self._failures.add(1, {semconv.ATTR_DISTRIBUTOR: self.distributor.name})
            _log.critical("allocation invariant violated: %s", exc)
        else:
            self._invalid.add(1, {semconv.ATTR_ERROR_TYPE: type(exc).__name__})

    @logged
    def allocate(self, amount: int, weights: Weights) -> List[Money]:
        attrs = dict(self._base_attrs)
        with self._tracer.start_as_current_span(semconv.SPAN_ALLOCATE, attrs) as span:
            try:
                plan = plan_allocation(amount, weights, distributor=self.distributor, bounds=self.bounds)
            except (MoneyError, InternalConsistencyFailure) as e:
                self._record_error(span, e)
                raise

            span.set_attributes(
                {
                    semconv.ATTR_AMOUNT: _attr_int(plan.amount),
                    semconv.ATTR_PARTIES: len(plan.weights),
                    semconv.ATTR_REMAINDER: plan.remainder,
                }
            )
            if plan.weights_defaulted:
                span.add_event(semconv.EVT_WEIGHTS_DEFAULTED, {semconv.ATTR_PARTIES: len(plan.weights)})
            if plan.remainder:
                span.add_event(
                    semconv.EVT_REMAINDER_DISTRIBUTED,
                    {
                        semconv.ATTR_REMAINDER: plan.remainder,
                        "dough.provisional": [_attr_int(p) for p in plan.provisional],
                        "dough.shares": [_attr_int(s) for s in plan.shares],
                    },
                )
            span.set_status_ok()

        self._allocations.add(1, {semconv.ATTR_DISTRIBUTOR: self.distributor.name})
        self._remainder_units.add(abs(plan.remainder), {semconv.ATTR_DISTRIBUTOR: self.distributor.name})
        return plan.shares

    @logged
    def discount(self, amount: int, percentage: int) -> DiscountResult:
        attrs = dict(self._base_attrs)
        attrs[semconv.ATTR_PERCENTAGE] = percentage if isinstance(percentage, int) else str(percentage)
        with self._tracer.start_as_current_span(semconv.SPAN_DISCOUNT, attrs) as span:
            try:
                result = discount(amount, percentage, distributor=self.distributor, bounds=self.bounds)
            except (MoneyError, InternalConsistencyFailure) as e:
                self._record_error(span, e)
                raise
            span.set_attribute(semconv.ATTR_AMOUNT, _attr_int(amount))
            span.set_status_ok()
        return result

    @logged
    def scale(self, amount: int, factor: int) -> Money:
        attrs = dict(self._base_attrs)
        with self._tracer.start_as_current_span(semconv.SPAN_SCALE, attrs) as span:
            try:
                result = scale(amount, factor, bounds=self.bounds)
            except MoneyError as e:
                self._record_error(span, e)
                raise
            span.set_attributes(
                {
                    semconv.ATTR_AMOUNT: _attr_int(amount),
                    semconv.ATTR_FACTOR: _attr_int(factor),
                }
            )
            span.set_status_ok()
        return result
