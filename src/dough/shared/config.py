from __future__ import annotations
from pydantic import BaseModel, field_validator
from typing import Optional
import os, yaml
from dotenv import load_dotenv

class MoneyCfg(BaseModel):
    amount_bits: Optional[int] = 64       # null -> unbounded amounts
    distributor: str = "round_robin"      # plugin name

    @field_validator("amount_bits")
    @classmethod
    def _bits_sane(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 2:
            raise ValueError("amount_bits must be >= 2 (or null for unbounded)")
        return v

class ObservabilityCfg(BaseModel):
    backend: str = "noop"                 # 'noop' | 'memory' | 'otel'
    runner_id: str = "dough"
    console_enabled: bool = False
    otlp_enabled: bool = False
    otlp_endpoint: str = "http://localhost:4317"

class LoggingCfg(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

class AppConfig(BaseModel):
    money: MoneyCfg = MoneyCfg()
    observability: ObservabilityCfg = ObservabilityCfg()
    logging: LoggingCfg = LoggingCfg()

def load_config(path: str) -> AppConfig:
    load_dotenv(override=False)
    import pathlib
    p = pathlib.Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    money_cfg = raw.setdefault("money", {}) or {}
    obs_cfg = raw.setdefault("observability", {}) or {}
    log_cfg = raw.setdefault("logging", {}) or {}

    def coalesce(yaml_val, env_val):
        return env_val if (yaml_val in (None, "") and env_val not in (None, "")) else yaml_val

    env_bits     = os.getenv("DOUGH_AMOUNT_BITS")
    env_dist     = os.getenv("DOUGH_DISTRIBUTOR")
    env_backend  = os.getenv("DOUGH_OBSERVABILITY_BACKEND")
    env_endpoint = os.getenv("DOUGH_OTLP_ENDPOINT")
    env_level    = os.getenv("DOUGH_LOG_LEVEL")

    # an explicit `amount_bits: null` in YAML means unbounded; only fill it when absent
    if "amount_bits" not in money_cfg and env_bits and env_bits.isdigit():
        money_cfg["amount_bits"] = int(env_bits)
    money_cfg["distributor"]   = coalesce(money_cfg.get("distributor"),   env_dist)
    obs_cfg["backend"]         = coalesce(obs_cfg.get("backend"),         env_backend)
    obs_cfg["otlp_endpoint"]   = coalesce(obs_cfg.get("otlp_endpoint"),   env_endpoint)
    log_cfg["level"]           = coalesce(log_cfg.get("level"),           env_level)

    # drop keys still unset so model defaults apply
    raw["money"] = {k: v for k, v in money_cfg.items() if v is not None or k == "amount_bits"}
    raw["observability"] = {k: v for k, v in obs_cfg.items() if v is not None}
    raw["logging"] = {k: v for k, v in log_cfg.items() if v is not None}
    return AppConfig.model_validate(raw)
