from __future__ import annotations

from contextlib import contextmanager
from typing import Any

from opentelemetry.trace.status import Status, StatusCode

from dough.ports.observability.traces import SpanPort, TracerPort, TracerProviderPort
from dough.ports.observability.types import Attributes, SpanStatus


class OtelSpan(SpanPort):
    def __init__(self, span: Any, *, schema_version: str) -> None:
        self._span = span
        self._schema_version = schema_version
        self._status = SpanStatus.UNSET

    @property
    def status(self) -> SpanStatus:
        return self._status

    def set_attribute(self, key: str, value: object) -> None:
        try:
            self._span.set_attribute(key, value)
        except Exception:
            return None

    def set_attributes(self, attributes: Attributes) -> None:
        for k, v in (attributes or {}).items():
            self.set_attribute(k, v)

    def add_event(self, name: str, attributes: Attributes | None = None) -> None:
        attrs: dict[str, Any] = dict(attributes or {})
        attrs["dough.schema_version"] = self._schema_version
        try:
            self._span.add_event(name, attributes=attrs)
        except Exception:
            return None

    def record_exception(self, exc: BaseException) -> None:
        try:
            self._span.record_exception(exc)
        except Exception:
            return None

    def set_status_ok(self) -> None:
        self._status = SpanStatus.OK
        try:
            self._span.set_status(Status(StatusCode.OK))
        except Exception:
            return None

    def set_status_error(self, message: str | None = None) -> None:
        self._status = SpanStatus.ERROR
        try:
            self._span.set_status(Status(StatusCode.ERROR, description=message))
        except Exception:
            return None


class OtelTracer(TracerPort):
    def __init__(self, tracer: Any, *, schema_version: str) -> None:
        self._tracer = tracer
        self._schema_version = schema_version

    @contextmanager
    def start_as_current_span(self, name: str, attributes: Attributes | None = None):
        attrs: dict[str, Any] = dict(attributes or {})
        attrs.setdefault("dough.schema_version", self._schema_version)
        # Exceptions are recorded by the caller; keep the SDK from doing it twice.
        with self._tracer.start_as_current_span(
            name,
            attributes=attrs,
            record_exception=False,
            set_status_on_exception=False,
        ) as span:
            yield OtelSpan(span, schema_version=self._schema_version)


class OtelTracerProvider(TracerProviderPort):
    def __init__(self, provider: Any, *, schema_version: str) -> None:
        self._provider = provider
        self._schema_version = schema_version

    def get_tracer(self, name: str, version: str | None = None) -> TracerPort:
        # The scope version is positional: keyword names differ across OTel releases.
        tracer = self._provider.get_tracer(name, version)
        return OtelTracer(tracer, schema_version=self._schema_version)
