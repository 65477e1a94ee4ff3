"""Registry – the process-wide default registry.

Built once at import time from ``MP_METRICS_*`` environment settings, so it
exists before any module-level ``must_register`` call can run. Libraries
that want isolation, and tests, construct their own :class:`Registry`.
"""
from __future__ import annotations

from mp_metrics.config import load_settings
from mp_metrics.metrics.ports import Collector
from mp_metrics.registry.registry import Registry
from mp_metrics.registry.report import GatherReport

default_registry = Registry.from_settings(load_settings())


def register(collector: Collector) -> None:
    default_registry.register(collector)


def must_register(*collectors: Collector) -> None:
    default_registry.must_register(*collectors)


def unregister(collector: Collector) -> bool:
    return default_registry.unregister(collector)


def gather() -> GatherReport:
    return default_registry.gather()


__all__ = ["default_registry", "gather", "must_register", "register", "unregister"]
