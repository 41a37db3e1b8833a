from __future__ import annotations

import logging

from dough.shared.config import load_config, AppConfig
from dough.domain.money.bounds import AmountBounds
from dough.application.plugins import registry as _registry
from dough.application.services.allocation_service import AllocationService
from dough.ports.observability.observability import ObservabilityPort

_log = logging.getLogger(__name__)


def _build_observability(cfg: AppConfig) -> ObservabilityPort:
    obs_cfg = cfg.observability
    backend = (obs_cfg.backend or "noop").lower()
    if backend == "noop":
        from dough.adapters.observability.noop.noop_observability import NoopObservability

        return NoopObservability()
    if backend == "memory":
        from dough.adapters.observability.memory.memory_observability import MemoryObservability

        return MemoryObservability()
    if backend == "otel":
        from dough.adapters.observability.otel.otel_observability import (
            OtelObservability,
            OtelObservabilityConfig,
        )

        return OtelObservability(
            OtelObservabilityConfig(
                runner_id=obs_cfg.runner_id,
                console_enabled=obs_cfg.console_enabled,
                otlp_enabled=obs_cfg.otlp_enabled,
                otlp_endpoint=obs_cfg.otlp_endpoint,
            )
        )
    raise ValueError(f"Unknown observability backend: {backend}")


def build_service(cfg: AppConfig, observability: ObservabilityPort | None = None) -> AllocationService:
    # Discover all remainder distributors
    _registry.auto_discover()

    distributor = _registry.pick_distributor(cfg.money.distributor)
    return AllocationService(
        distributor=distributor,
        bounds=AmountBounds(bits=cfg.money.amount_bits),
        observability=observability if observability is not None else _build_observability(cfg),
    )


def run_app(config_path: str) -> None:
    cfg = load_config(config_path)
    logging.basicConfig(level=cfg.logging.level.upper(), format=cfg.logging.format)

    observability = _build_observability(cfg)
    try:
        service = build_service(cfg, observability)
        _log.info(
            "allocation service ready distributor=%s amount_bits=%s",
            service.distributor.name,
            service.bounds.bits,
        )
        for amount, weights in ((100, [1, 1, 1]), (7, [0, 1, 1]), (-105, [3, 7]), (30000, [0, 0, 0])):
            _log.info("allocate(%d, %s) -> %s", amount, weights, [int(s) for s in service.allocate(amount, weights)])
        discounted, saved = service.discount(99, 10)
        _log.info("discount(99, 10) -> discounted=%d saved=%d", discounted, saved)
        _log.info("scale(250, 3) -> %d", service.scale(250, 3))
    finally:
        observability.shutdown()
