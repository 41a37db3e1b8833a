from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SimpleSpanProcessor

from dough.adapters.observability.otel.otel_metrics import OtelMeterProvider
from dough.adapters.observability.otel.otel_traces import OtelTracerProvider
from dough.ports.observability import semconv
from dough.ports.observability.metrics import MeterProviderPort
from dough.ports.observability.observability import ObservabilityPort
from dough.ports.observability.traces import TracerProviderPort
from dough.ports.observability.types import DOUGH_SCHEMA_VERSION

_log = logging.getLogger(__name__)


@dataclass(slots=True)
class OtelObservabilityConfig:
    runner_id: str
    schema_version: str = DOUGH_SCHEMA_VERSION

    # Print finished spans to stdout (SDK console exporter)
    console_enabled: bool = False

    # OTLP export, needs the `otlp` extra
    otlp_enabled: bool = False
    otlp_endpoint: str = "http://localhost:4317"


class OtelObservability(ObservabilityPort):
    """
    Observability backed by private OpenTelemetry SDK providers. The global
    OTel providers are left alone so a host application keeps control of them.
    """

    def __init__(self, cfg: OtelObservabilityConfig) -> None:
        self._cfg = cfg

        resource = Resource.create(
            {
                semconv.SERVICE_NAME: "dough",
                semconv.SERVICE_INSTANCE_ID: cfg.runner_id,
                semconv.DOUGH_RUNNER_ID: cfg.runner_id,
                semconv.DOUGH_SCHEMA_VERSION: cfg.schema_version,
            }
        )

        tracer_provider = TracerProvider(resource=resource)
        if cfg.console_enabled:
            tracer_provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        if cfg.otlp_enabled:
            tracer_provider.add_span_processor(BatchSpanProcessor(_build_otlp_span_exporter(cfg.otlp_endpoint)))

        meter_provider = _build_meter_provider(
            resource=resource,
            otlp_enabled=cfg.otlp_enabled,
            otlp_endpoint=cfg.otlp_endpoint,
        )

        self._sdk_tracer_provider = tracer_provider
        self._sdk_meter_provider = meter_provider
        self._traces = OtelTracerProvider(tracer_provider, schema_version=cfg.schema_version)
        self._metrics = OtelMeterProvider(meter_provider)

    @property
    def traces(self) -> TracerProviderPort:
        return self._traces

    @property
    def metrics(self) -> MeterProviderPort:
        return self._metrics

    def force_flush(self) -> None:
        self._sdk_tracer_provider.force_flush()
        self._sdk_meter_provider.force_flush()

    def shutdown(self) -> None:
        try:
            self.force_flush()
        finally:
            self._sdk_tracer_provider.shutdown()
            self._sdk_meter_provider.shutdown()


def _uses_http(endpoint: str) -> bool:
    return ":4318" in endpoint or endpoint.rstrip("/").endswith("4318")


def _build_otlp_span_exporter(endpoint: str) -> Any:
    # gRPC on 4317 by default, HTTP/protobuf on 4318.
    try:
        if _uses_http(endpoint):
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

            return OTLPSpanExporter(endpoint=endpoint)
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        return OTLPSpanExporter(endpoint=endpoint, insecure=True)
    except ImportError as e:
        raise RuntimeError(
            "otlp_enabled=True requires the OTLP exporter; install dough[otlp]"
        ) from e


def _build_meter_provider(*, resource: Any, otlp_enabled: bool, otlp_endpoint: str) -> MeterProvider:
    if not otlp_enabled:
        return MeterProvider(resource=resource)

    from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader

    try:
        if _uses_http(otlp_endpoint):
            from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter

            exporter = OTLPMetricExporter(endpoint=otlp_endpoint)
        else:
            from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter

            exporter = OTLPMetricExporter(endpoint=otlp_endpoint, insecure=True)
    except ImportError as e:
        raise RuntimeError(
            "otlp_enabled=True requires the OTLP exporter; install dough[otlp]"
        ) from e

    _log.info("exporting metrics over OTLP to %s", otlp_endpoint)
    return MeterProvider(resource=resource, metric_readers=[PeriodicExportingMetricReader(exporter)])
