from __future__ import annotations

from contextlib import contextmanager

from dough.ports.observability.metrics import CounterPort, MeterPort, MeterProviderPort
from dough.ports.observability.observability import ObservabilityPort
from dough.ports.observability.traces import SpanPort, TracerPort, TracerProviderPort
from dough.ports.observability.types import Attributes


class _NoopSpan(SpanPort):
    """Accepts everything, keeps nothing."""

    def set_attribute(self, key: str, value: object) -> None: ...
    def set_attributes(self, attributes: Attributes) -> None: ...
    def add_event(self, name: str, attributes: Attributes | None = None) -> None: ...
    def record_exception(self, exc: BaseException) -> None: ...
    def set_status_ok(self) -> None: ...
    def set_status_error(self, message: str | None = None) -> None: ...


class _NoopCounter(CounterPort):
    def add(self, amount: int, attributes: Attributes | None = None) -> None: ...


_SPAN = _NoopSpan()
_COUNTER = _NoopCounter()


class _NoopInstrumentation(TracerProviderPort, TracerPort, MeterProviderPort, MeterPort):
    # one object serves as tracer provider, tracer, meter provider and meter

    def get_tracer(self, name: str, version: str | None = None) -> TracerPort:
        return self

    @contextmanager
    def start_as_current_span(self, name: str, attributes: Attributes | None = None):
        yield _SPAN

    def get_meter(self, name: str, version: str | None = None) -> MeterPort:
        return self

    def create_counter(self, name: str, unit: str | None = None, description: str | None = None) -> CounterPort:
        return _COUNTER


class NoopObservability(ObservabilityPort):
    def __init__(self) -> None:
        self._instrumentation = _NoopInstrumentation()

    @property
    def traces(self) -> TracerProviderPort:
        return self._instrumentation

    @property
    def metrics(self) -> MeterProviderPort:
        return self._instrumentation

    def shutdown(self) -> None:
        return None

    def force_flush(self) -> None:
        return None
