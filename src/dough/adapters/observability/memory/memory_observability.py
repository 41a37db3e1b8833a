from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
import secrets
import time
from typing import Any, Dict, List, Optional

import contextvars

from dough.ports.observability.metrics import CounterPort, MeterPort, MeterProviderPort
from dough.ports.observability.observability import ObservabilityPort
from dough.ports.observability.traces import SpanPort, TracerPort, TracerProviderPort
from dough.ports.observability.types import Attributes, DOUGH_SCHEMA_VERSION, SpanStatus


_current_span: contextvars.ContextVar["MemorySpan | None"] = contextvars.ContextVar("dough_mem_current_span", default=None)


def _new_trace_id() -> str:
    return secrets.token_hex(16)  # 32 hex chars


def _new_span_id() -> str:
    return secrets.token_hex(8)  # 16 hex chars


@dataclass
class MemorySpan(SpanPort):
    name: str
    trace_id: str
    span_id: str
    parent_span_id: Optional[str]
    start_ns: int = field(default_factory=time.time_ns)
    end_ns: Optional[int] = None
    status: SpanStatus = SpanStatus.UNSET
    attributes: Dict[str, Any] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)
    exceptions: List[str] = field(default_factory=list)

    def set_attribute(self, key: str, value: object) -> None:
        self.attributes[key] = value

    def set_attributes(self, attributes: Attributes) -> None:
        for k, v in attributes.items():
            self.attributes[k] = v

    def add_event(self, name: str, attributes: Attributes | None = None) -> None:
        ev_attrs: Dict[str, Any] = dict(attributes or {})
        ev_attrs["dough.schema_version"] = DOUGH_SCHEMA_VERSION
        self.events.append(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "name": name,
                "attributes": ev_attrs,
            }
        )

    def record_exception(self, exc: BaseException) -> None:
        self.exceptions.append(repr(exc))

    def set_status_ok(self) -> None:
        self.status = SpanStatus.OK

    def set_status_error(self, message: str | None = None) -> None:
        self.status = SpanStatus.ERROR
        if message:
            self.attributes.setdefault("error.message", message)


class MemoryTracer(TracerPort):
    def __init__(self, sink: "MemorySink") -> None:
        self._sink = sink

    @contextmanager
    def start_as_current_span(self, name: str, attributes: Attributes | None = None):
        parent = _current_span.get()
        span = MemorySpan(
            name=name,
            trace_id=parent.trace_id if parent else _new_trace_id(),
            span_id=_new_span_id(),
            parent_span_id=parent.span_id if parent else None,
        )
        span.set_attributes(attributes or {})
        token = _current_span.set(span)
        self._sink.spans_started.append(span)
        try:
            yield span
        finally:
            span.end_ns = time.time_ns()
            _current_span.reset(token)
            self._sink.spans_ended.append(span)


class MemoryTracerProvider(TracerProviderPort):
    def __init__(self, sink: "MemorySink") -> None:
        self._sink = sink

    def get_tracer(self, name: str, version: str | None = None) -> TracerPort:
        return MemoryTracer(self._sink)


class MemoryCounter(CounterPort):
    def __init__(self, sink: "MemorySink", name: str) -> None:
        self._sink = sink
        self._name = name

    def add(self, amount: int, attributes: Attributes | None = None) -> None:
        self._sink.counters[self._name] = self._sink.counters.get(self._name, 0) + int(amount)


class MemoryMeter(MeterPort):
    def __init__(self, sink: "MemorySink") -> None:
        self._sink = sink

    def create_counter(self, name: str, unit: str | None = None, description: str | None = None) -> CounterPort:
        return MemoryCounter(self._sink, name)


class MemoryMeterProvider(MeterProviderPort):
    def __init__(self, sink: "MemorySink") -> None:
        self._sink = sink

    def get_meter(self, name: str, version: str | None = None) -> MeterPort:
        return MemoryMeter(self._sink)


@dataclass
class MemorySink:
    spans_started: List[MemorySpan] = field(default_factory=list)
    spans_ended: List[MemorySpan] = field(default_factory=list)
    counters: Dict[str, int] = field(default_factory=dict)


class MemoryObservability(ObservabilityPort):
    """Keeps every span and counter in memory. Meant for tests."""

    def __init__(self) -> None:
        self.sink = MemorySink()
        self._traces = MemoryTracerProvider(self.sink)
        self._metrics = MemoryMeterProvider(self.sink)

    @property
    def traces(self) -> TracerProviderPort:
        return self._traces

    @property
    def metrics(self) -> MeterProviderPort:
        return self._metrics

    def shutdown(self) -> None:
        return None

    def force_flush(self) -> None:
        return None
