from __future__ import annotations

import logging
from typing import Dict

from dough.domain.money.distributors.base import BaseRemainderDistributor

_log = logging.getLogger(__name__)

DISTRIBUTORS: Dict[str, BaseRemainderDistributor] = {}
DEFAULT_DISTRIBUTOR = "round_robin"


def register_distributor(*, name: str, tags: set[str]):
    """
    Register a remainder distribution strategy.
    """
    def deco(cls):
        inst = cls()
        inst.name = name
        inst.tags = tags
        DISTRIBUTORS[name] = inst
        return cls
    return deco


def pick_distributor(name: str | None = None) -> BaseRemainderDistributor:
    """
    Pick a distributor by name. Without a name, prefer the one tagged
    "default", then DEFAULT_DISTRIBUTOR.
    """
    if name:
        try:
            return DISTRIBUTORS[name]
        except KeyError:
            raise KeyError(
                f"No distributor registered for name={name!r} "
                f"(known: {sorted(DISTRIBUTORS)})"
            ) from None

    for dist in DISTRIBUTORS.values():
        if "default" in getattr(dist, "tags", set()):
            return dist
    return DISTRIBUTORS[DEFAULT_DISTRIBUTOR]


def auto_discover() -> None:
    """
    Import all distributor modules so that their decorators run and fill the
    registry above. Called once during application startup.
    """
    import importlib
    import pkgutil

    bases = ("dough.domain.money.distributors",)

    for base in bases:
        try:
            pkg = importlib.import_module(base)
        except Exception:
            _log.exception("[plugins] base import failed: %s", base)
            continue

        pkg_path = getattr(pkg, "__path__", None)
        if not pkg_path:
            continue

        for mod in pkgutil.walk_packages(pkg_path, pkg.__name__ + "."):
            try:
                importlib.import_module(mod.name)
            except Exception:
                _log.exception("[plugins] import failed: %s", mod.name)

    _log.info("[plugins] discovered distributors=%d (%s)", len(DISTRIBUTORS), ", ".join(sorted(DISTRIBUTORS)))
